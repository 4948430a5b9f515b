from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class DashboardFilters:
    months_window: int = 12
    top_n: int = 10
    selected_month: Optional[str] = None
    selected_departments: List[str] = field(default_factory=list)


def _clamped_int(value: object, default: int, low: int, high: int) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        out = default
    return max(low, min(high, out))


def _as_str_list(values: Optional[Iterable[object]]) -> List[str]:
    if not values or isinstance(values, str):
        return []
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


def normalize_filters(raw: dict, *, available_months: Optional[List[str]] = None) -> DashboardFilters:
    available_months = sorted(available_months or [])

    selected_month = raw.get("selected_month")
    selected_month = str(selected_month).strip() if selected_month is not None else None
    if not selected_month or selected_month not in available_months:
        selected_month = None

    return DashboardFilters(
        months_window=_clamped_int(raw.get("months_window", 12), 12, 1, 120),
        top_n=_clamped_int(raw.get("top_n", 10), 10, 1, 100),
        selected_month=selected_month,
        selected_departments=_as_str_list(raw.get("selected_departments")),
    )
