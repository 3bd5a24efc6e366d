"""
Domain package for Sakila Reports.

Exports the row models returned by the report runner. Keep this package
focused on data definitions and validation concerns.
"""

from sakila_reports.domain.models import (
    AvailabilityStatus,
    CategoryFilmCount,
    CategoryRuntime,
    FilmRentalCount,
    ReportRow,
    StoreLocation,
    StoreRevenue,
    TitleAvailability,
    TitleStoreAvailability,
)

__all__ = [
    "AvailabilityStatus",
    "CategoryFilmCount",
    "CategoryRuntime",
    "FilmRentalCount",
    "ReportRow",
    "StoreLocation",
    "StoreRevenue",
    "TitleAvailability",
    "TitleStoreAvailability",
]
