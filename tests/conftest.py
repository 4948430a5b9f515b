"""Pytest configuration and in-memory workbook builders."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pandas as pd
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `analytics` and `api` without package installation.
    sys.path.insert(0, project_root_str)

HEADER = ["번호", "제목", "상태", "요청자", "담당자", "유형", "우선순위", "부서", "시스템", "요청일시"]


def build_row(requested_at: object, status: object, department: object) -> List[object]:
    """Ten-column row with the request fields at their fixed positions."""
    row: List[object] = [f"filler-{i}" for i in range(len(HEADER))]
    row[2] = status
    row[7] = department
    row[9] = requested_at
    return row


def build_workbook(rows: Sequence[Sequence[object]], header: Optional[Sequence[str]] = None) -> bytes:
    header = list(header or HEADER)
    frame = pd.DataFrame([list(r) for r in rows], columns=header)
    buffer = io.BytesIO()
    frame.to_excel(buffer, index=False, header=True, engine="openpyxl")
    return buffer.getvalue()


@pytest.fixture
def make_row() -> Callable[..., List[object]]:
    return build_row


@pytest.fixture
def make_workbook() -> Callable[..., bytes]:
    return build_workbook


@pytest.fixture
def example_rows() -> List[List[object]]:
    """Three requests over two months, two of them closed."""
    return [
        build_row("2024-01 10:00", "종료", "A"),
        build_row("2024-01 11:00", "진행", "B"),
        build_row("2024-02 09:00", "종료", "A"),
    ]


@pytest.fixture
def example_workbook(example_rows: List[List[object]]) -> bytes:
    return build_workbook(example_rows)
