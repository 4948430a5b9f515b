from __future__ import annotations

from analytics.filters import DashboardFilters, normalize_filters


def test_defaults_when_nothing_is_selected() -> None:
    assert normalize_filters({}) == DashboardFilters()


def test_numeric_options_are_clamped_or_defaulted() -> None:
    f = normalize_filters({"months_window": 500, "top_n": 0})
    assert (f.months_window, f.top_n) == (120, 1)

    f = normalize_filters({"months_window": "six", "top_n": None})
    assert (f.months_window, f.top_n) == (12, 10)


def test_selected_month_must_be_available() -> None:
    months = ["2024-01", "2024-02"]
    assert normalize_filters({"selected_month": " 2024-01 "}, available_months=months).selected_month == "2024-01"
    assert normalize_filters({"selected_month": "2023-12"}, available_months=months).selected_month is None


def test_selected_departments_drop_blanks() -> None:
    f = normalize_filters({"selected_departments": ["인사팀", " ", None, "IT "]})
    assert f.selected_departments == ["인사팀", "IT"]
    assert normalize_filters({"selected_departments": "IT"}).selected_departments == []
