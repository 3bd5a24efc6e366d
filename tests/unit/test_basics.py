import pytest

from sakila_reports import config
from sakila_reports.domain.models import CategoryRuntime, FilmRentalCount
from sakila_reports.reports.catalog import available_reports, get_report
from sakila_reports.reports.errors import UnknownReport

CATALOG_NAMES = [
    "all_titles_availability",
    "avg_runtime_per_category",
    "films_per_category",
    "store_geography",
    "store_revenue",
    "title_store1_availability",
    "top10_rented_films",
    "top5_longest_categories",
]

_DB_ENV_VARS = (
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_SCHEMA",
    "DB_STATEMENT_TIMEOUT_MS",
    "REPORT_CONCURRENCY",
)


def test_get_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    for var in _DB_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    settings = config.get_settings()
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_user == "postgres"
    assert settings.db_name == "sakila"
    assert settings.db_schema is None
    assert settings.db_statement_timeout_ms == 0
    assert settings.report_concurrency == 1


def test_get_settings_reads_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DB_NAME", "pagila")
    monkeypatch.setenv("DB_SCHEMA", "public")
    monkeypatch.setenv("REPORT_CONCURRENCY", "3")
    settings = config.get_settings()
    assert settings.db_name == "pagila"
    assert settings.db_schema == "public"
    assert settings.report_concurrency == 3


def test_available_reports_lists_whole_catalog_sorted():
    assert available_reports() == CATALOG_NAMES


def test_get_report_unknown_name_raises():
    with pytest.raises(UnknownReport) as excinfo:
        get_report("revenue_per_staff")
    assert excinfo.value.name == "revenue_per_staff"
    assert excinfo.value.available == CATALOG_NAMES
    assert "revenue_per_staff" in str(excinfo.value)


@pytest.mark.parametrize(
    ("name", "columns"),
    [
        ("films_per_category", ("category_name", "film_count")),
        ("store_geography", ("store_id", "city", "country")),
        ("store_revenue", ("store_id", "total_revenue")),
        ("avg_runtime_per_category", ("category_name", "avg_running_time")),
        ("top5_longest_categories", ("category_name", "avg_running_time")),
        ("top10_rented_films", ("film_title", "rental_count")),
        ("title_store1_availability", ("title", "store_id", "available_copies")),
        ("all_titles_availability", ("title", "availability_status")),
    ],
)
def test_report_output_columns(name, columns):
    assert get_report(name).columns == columns


def test_limits_and_orderings_are_part_of_the_query_text():
    assert "LIMIT 5" in get_report("top5_longest_categories").sql
    assert "LIMIT" not in get_report("avg_runtime_per_category").sql
    top10 = get_report("top10_rented_films").sql
    assert "LIMIT 10" in top10
    assert "ORDER BY\n    rental_count DESC, f.title ASC" in top10
    assert get_report("top5_longest_categories").row_model is CategoryRuntime
    assert get_report("top10_rented_films").row_model is FilmRentalCount


def test_availability_queries_only_treat_open_rentals_as_checked_out():
    for name in ("title_store1_availability", "all_titles_availability"):
        assert "r.return_date IS NULL" in get_report(name).sql


@pytest.mark.parametrize("name", CATALOG_NAMES)
def test_row_models_are_frozen_and_match_columns_by_name_only(name):
    model = get_report(name).row_model
    assert model.model_config == {"frozen": True}
    assert all(field.alias is None for field in model.model_fields.values())
