from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from analytics.errors import RowError


@dataclass(frozen=True)
class RequestRecord:
    timestamp: str
    status: str
    department: str


@dataclass(frozen=True)
class RowIssue:
    """A skipped worksheet row; `row` is the 1-based sheet row number."""

    row: int
    kind: str
    message: str

    @classmethod
    def from_error(cls, error: RowError) -> "RowIssue":
        return cls(row=error.row, kind=type(error).__name__, message=str(error))


@dataclass(frozen=True)
class MonthlyStat:
    month: str
    requests: int
    closed: int
    closure_rate: float

    @classmethod
    def from_counts(cls, month: str, requests: int, closed: int) -> "MonthlyStat":
        closure_rate = (float(closed) / float(requests)) * 100.0 if requests > 0 else 0.0
        return cls(month=month, requests=requests, closed=closed, closure_rate=closure_rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "requests": self.requests,
            "closed": self.closed,
            "closureRate": self.closure_rate,
        }


@dataclass(frozen=True)
class DepartmentStat:
    department: str
    status: str
    month: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "status": self.status,
            "month": self.month,
            "count": self.count,
        }


@dataclass(frozen=True)
class AggregationResult:
    monthly_stats: List[MonthlyStat] = field(default_factory=list)
    department_stats: List[DepartmentStat] = field(default_factory=list)
    skipped: List[RowIssue] = field(default_factory=list)
    rows_read: int = 0

    @property
    def rows_aggregated(self) -> int:
        return sum(stat.requests for stat in self.monthly_stats)

    @property
    def months(self) -> List[str]:
        return [stat.month for stat in self.monthly_stats]

    def to_dict(self) -> Dict[str, Any]:
        """Wire format handed to the calling environment."""
        return {
            "monthlyStats": [stat.to_dict() for stat in self.monthly_stats],
            "departmentStats": [stat.to_dict() for stat in self.department_stats],
        }


@dataclass(frozen=True)
class SpectrumPoint:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}
