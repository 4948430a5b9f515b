from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

import pandas as pd

from analytics.charts import (
    closure_rate_chart,
    department_status_chart,
    monthly_requests_chart,
    status_distribution_chart,
    to_vega_spec,
)
from analytics.filters import DashboardFilters
from analytics.models import AggregationResult

MONTHLY_COLUMNS = ["month", "requests", "closed", "closureRate"]
DEPARTMENT_COLUMNS = ["department", "status", "month", "count"]


def monthly_frame(result: AggregationResult) -> pd.DataFrame:
    return pd.DataFrame([stat.to_dict() for stat in result.monthly_stats], columns=MONTHLY_COLUMNS)


def department_frame(result: AggregationResult) -> pd.DataFrame:
    return pd.DataFrame([stat.to_dict() for stat in result.department_stats], columns=DEPARTMENT_COLUMNS)


def _rate(closed: int, requests: int) -> float:
    return (float(closed) / float(requests)) * 100.0 if requests > 0 else 0.0


def _department_rows(breakdown: pd.DataFrame, totals: pd.Series) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for department, total in totals.items():
        dept = breakdown[breakdown["department"] == department]
        statuses = {str(s): int(c) for s, c in zip(dept["status"], dept["count"])}
        rows.append({"department": str(department), "total": int(total), "statuses": statuses})
    return rows


def compute_overview(filters: DashboardFilters, result: AggregationResult) -> Dict[str, Any]:
    monthly = monthly_frame(result)
    departments = department_frame(result)
    if monthly.empty:
        return {
            "filters": asdict(filters),
            "latest_month": None,
            "kpis": {},
            "monthly": [],
            "departments": [],
            "status_distribution": [],
            "charts": {},
        }

    latest_month: Optional[str] = filters.selected_month
    if latest_month not in set(monthly["month"]):
        latest_month = str(monthly["month"].max())
    window = monthly[monthly["month"] <= latest_month].tail(filters.months_window)
    current = monthly[monthly["month"] == latest_month].iloc[0]

    total_requests = int(monthly["requests"].sum())
    total_closed = int(monthly["closed"].sum())
    kpis = {
        "month": latest_month,
        "requests": int(current["requests"]),
        "closed": int(current["closed"]),
        "closure_rate": float(current["closureRate"]),
        "total_requests": total_requests,
        "total_closed": total_closed,
        "overall_closure_rate": _rate(total_closed, total_requests),
    }

    month_depts = departments[departments["month"] == latest_month]
    if filters.selected_departments:
        month_depts = month_depts[month_depts["department"].isin(filters.selected_departments)]

    # Stable sort keeps alphabetical order between departments with equal totals.
    totals = month_depts.groupby("department", sort=True)["count"].sum().sort_values(ascending=False, kind="mergesort")
    top_totals = totals.head(filters.top_n)
    breakdown = month_depts[month_depts["department"].isin(top_totals.index)]

    distribution = (
        month_depts.groupby("status", sort=True)["count"]
        .sum()
        .sort_values(ascending=False, kind="mergesort")
        .reset_index()
    )

    charts: Dict[str, Any] = {
        "monthly_requests": to_vega_spec(monthly_requests_chart(window)),
        "closure_rate_trend": to_vega_spec(closure_rate_chart(window)),
    }
    if not breakdown.empty:
        charts["department_status"] = to_vega_spec(department_status_chart(breakdown))
        charts["status_distribution"] = to_vega_spec(status_distribution_chart(distribution))

    return {
        "filters": asdict(filters),
        "latest_month": latest_month,
        "kpis": kpis,
        "monthly": window.to_dict(orient="records"),
        "departments": _department_rows(breakdown, top_totals),
        "status_distribution": distribution.to_dict(orient="records"),
        "charts": charts,
    }
