"""
Row models for Sakila Reports.

One frozen model per report output shape. Field order mirrors the column order
each report query selects, and field names match the column aliases, so a row
can be validated straight from `dict(zip(columns, values))`.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

AvailabilityStatus = Literal["Available", "NOT available"]


class ReportRow(BaseModel):
    """
    Base class for report rows. Rows are immutable once read from the engine.
    """

    model_config = {"frozen": True}


class CategoryFilmCount(ReportRow):
    category_name: str = Field(..., description="Category name.")
    film_count: int = Field(..., ge=0, description="Films associated with the category.")


class StoreLocation(ReportRow):
    store_id: int = Field(..., description="Store primary key.")
    city: str = Field(..., description="City of the store address.")
    country: str = Field(..., description="Country of the store address.")


class StoreRevenue(ReportRow):
    store_id: int = Field(..., description="Store primary key.")
    total_revenue: Decimal = Field(..., description="Payments summed per store, 2 decimals.")


class CategoryRuntime(ReportRow):
    category_name: str = Field(..., description="Category name.")
    avg_running_time: Decimal = Field(..., description="Mean film length in minutes, 2 decimals.")


class FilmRentalCount(ReportRow):
    film_title: str = Field(..., description="Film title.")
    rental_count: int = Field(..., ge=0, description="Rentals across all inventory copies.")


class TitleStoreAvailability(ReportRow):
    title: str = Field(..., description="Film title.")
    store_id: int = Field(..., description="Store primary key.")
    available_copies: int = Field(..., ge=0, description="Copies without an open rental.")


class TitleAvailability(ReportRow):
    title: str = Field(..., description="Film title.")
    availability_status: AvailabilityStatus = Field(
        ..., description="'Available' when a copy is on the shelf, else 'NOT available'."
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
