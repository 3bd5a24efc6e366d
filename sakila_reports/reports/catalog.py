"""
Report catalog for Sakila Reports.

Each entry pairs a report name with its fixed query text and the row model
describing its output. Queries take no parameters. Ordering and limits inside
the SQL are part of each report's contract.

The SQL sticks to portable syntax (single-quoted literals, no dialect
functions) so the same text runs on PostgreSQL and SQLite.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Type

from sakila_reports.domain.models import (
    CategoryFilmCount,
    CategoryRuntime,
    FilmRentalCount,
    ReportRow,
    StoreLocation,
    StoreRevenue,
    TitleAvailability,
    TitleStoreAvailability,
)
from sakila_reports.reports.errors import UnknownReport


@dataclass(frozen=True)
class ReportDefinition:
    """
    A named, parameterless, read-only query with a fixed output shape.

    Attributes
    ----------
    name : str
        Machine-friendly identifier used by the CLI and the runner.
    description : str
        Reporting question the query answers.
    sql : str
        Query text sent to the engine as is.
    row_model : type[ReportRow]
        Model each result row is validated into.
    """

    name: str
    description: str
    sql: str
    row_model: Type[ReportRow]

    @property
    def columns(self) -> Tuple[str, ...]:
        """Expected output columns, in select order."""
        return tuple(self.row_model.model_fields)


FILMS_PER_CATEGORY_SQL = """
SELECT
    c.name AS category_name,
    COUNT(fc.film_id) AS film_count
FROM
    category AS c
LEFT JOIN
    film_category AS fc ON fc.category_id = c.category_id
GROUP BY
    c.name
ORDER BY
    film_count DESC
"""

STORE_GEOGRAPHY_SQL = """
SELECT DISTINCT
    s.store_id,
    ci.city,
    co.country
FROM
    store AS s
JOIN
    address AS a ON s.address_id = a.address_id
JOIN
    city AS ci ON a.city_id = ci.city_id
JOIN
    country AS co ON ci.country_id = co.country_id
"""

STORE_REVENUE_SQL = """
SELECT
    s.store_id,
    ROUND(SUM(p.amount), 2) AS total_revenue
FROM
    store AS s
JOIN
    inventory AS i ON s.store_id = i.store_id
JOIN
    rental AS r ON i.inventory_id = r.inventory_id
JOIN
    payment AS p ON r.rental_id = p.rental_id
GROUP BY
    s.store_id
"""

_AVG_RUNTIME_PER_CATEGORY_BODY = """
SELECT
    c.name AS category_name,
    ROUND(AVG(f.length), 2) AS avg_running_time
FROM
    category AS c
JOIN
    film_category AS fc ON c.category_id = fc.category_id
JOIN
    film AS f ON fc.film_id = f.film_id
GROUP BY
    c.name
ORDER BY
    avg_running_time DESC
"""

AVG_RUNTIME_PER_CATEGORY_SQL = _AVG_RUNTIME_PER_CATEGORY_BODY

TOP5_LONGEST_CATEGORIES_SQL = _AVG_RUNTIME_PER_CATEGORY_BODY + "LIMIT 5\n"

TOP10_RENTED_FILMS_SQL = """
SELECT
    f.title AS film_title,
    COUNT(r.rental_id) AS rental_count
FROM
    film AS f
JOIN
    inventory AS i ON f.film_id = i.film_id
JOIN
    rental AS r ON i.inventory_id = r.inventory_id
GROUP BY
    f.title
ORDER BY
    rental_count DESC, f.title ASC
LIMIT 10
"""

# A copy joined to an open rental (no return date) is checked out.
TITLE_STORE1_AVAILABILITY_SQL = """
SELECT
    f.title,
    s.store_id AS store_id,
    COUNT(i.inventory_id) AS available_copies
FROM
    store AS s
JOIN
    inventory AS i ON s.store_id = i.store_id
JOIN
    film AS f ON i.film_id = f.film_id
LEFT JOIN
    rental AS r ON i.inventory_id = r.inventory_id AND r.return_date IS NULL
WHERE
    UPPER(f.title) = UPPER('Academy Dinosaur') AND s.store_id = 1
    AND r.rental_id IS NULL
GROUP BY
    f.title, s.store_id
"""

ALL_TITLES_AVAILABILITY_SQL = """
SELECT
    f.title,
    CASE
        WHEN COUNT(i.inventory_id) - COUNT(r.rental_id) > 0 THEN 'Available'
        ELSE 'NOT available'
    END AS availability_status
FROM
    film AS f
LEFT JOIN
    inventory AS i ON f.film_id = i.film_id
LEFT JOIN
    rental AS r ON i.inventory_id = r.inventory_id AND r.return_date IS NULL
GROUP BY
    f.film_id, f.title
ORDER BY
    f.title
"""


_CATALOG: Dict[str, ReportDefinition] = {
    definition.name: definition
    for definition in (
        ReportDefinition(
            name="films_per_category",
            description="Number of films per category, including categories without films.",
            sql=FILMS_PER_CATEGORY_SQL,
            row_model=CategoryFilmCount,
        ),
        ReportDefinition(
            name="store_geography",
            description="Store ID, city and country for each store.",
            sql=STORE_GEOGRAPHY_SQL,
            row_model=StoreLocation,
        ),
        ReportDefinition(
            name="store_revenue",
            description="Total payment revenue per store in dollars.",
            sql=STORE_REVENUE_SQL,
            row_model=StoreRevenue,
        ),
        ReportDefinition(
            name="avg_runtime_per_category",
            description="Average film running time per category, longest first.",
            sql=AVG_RUNTIME_PER_CATEGORY_SQL,
            row_model=CategoryRuntime,
        ),
        ReportDefinition(
            name="top5_longest_categories",
            description="The 5 categories with the longest average running time.",
            sql=TOP5_LONGEST_CATEGORIES_SQL,
            row_model=CategoryRuntime,
        ),
        ReportDefinition(
            name="top10_rented_films",
            description="The 10 most rented films, ties broken by title.",
            sql=TOP10_RENTED_FILMS_SQL,
            row_model=FilmRentalCount,
        ),
        ReportDefinition(
            name="title_store1_availability",
            description="Copies of 'Academy Dinosaur' on the shelf at store 1.",
            sql=TITLE_STORE1_AVAILABILITY_SQL,
            row_model=TitleStoreAvailability,
        ),
        ReportDefinition(
            name="all_titles_availability",
            description="Availability status of every film title.",
            sql=ALL_TITLES_AVAILABILITY_SQL,
            row_model=TitleAvailability,
        ),
    )
}


def available_reports() -> List[str]:
    """List available report names."""
    return sorted(_CATALOG)


def get_report(name: str) -> ReportDefinition:
    """
    Look up a report definition by name.

    Raises
    ------
    UnknownReport
        If `name` is not part of the catalog.
    """
    try:
        return _CATALOG[name]
    except KeyError:
        raise UnknownReport(name, _CATALOG) from None


__all__ = [
    "ReportDefinition",
    "available_reports",
    "get_report",
]
