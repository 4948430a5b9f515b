from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class DashboardFiltersModel(BaseModel):
    months_window: int = 12
    top_n: int = 10
    selected_month: Optional[str] = None
    selected_departments: List[str] = Field(default_factory=list)


class MonthlyStatModel(BaseModel):
    month: str
    requests: int
    closed: int
    closureRate: float


class DepartmentStatModel(BaseModel):
    department: str
    status: str
    month: str
    count: int


class AggregationResponse(BaseModel):
    monthlyStats: List[MonthlyStatModel]
    departmentStats: List[DepartmentStatModel]


class SpectrumPointModel(BaseModel):
    x: float
    y: float
