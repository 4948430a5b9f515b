from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from analytics.data import extract_record, is_closed, iter_data_rows, month_key, read_sheet
from analytics.errors import RowError
from analytics.models import AggregationResult, DepartmentStat, MonthlyStat, RowIssue


logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["department", "status", "month", "closed"]
DEPARTMENT_ORDER = ["month", "department", "status"]


def build_request_frame(rows: Iterable[Tuple[int, Sequence[object]]]) -> Tuple[pd.DataFrame, List[RowIssue], int]:
    """Extract one record per row, keeping rows that fail as issues."""
    records: List[Dict[str, object]] = []
    skipped: List[RowIssue] = []
    rows_read = 0
    for row_number, cells in rows:
        rows_read += 1
        try:
            record = extract_record(cells, row_number)
            month = month_key(record.timestamp, row_number)
        except RowError as exc:
            logger.warning("skipping %s", exc)
            skipped.append(RowIssue.from_error(exc))
            continue
        records.append(
            {
                "department": record.department,
                "status": record.status,
                "month": month,
                "closed": is_closed(record.status),
            }
        )
    return pd.DataFrame.from_records(records, columns=FRAME_COLUMNS), skipped, rows_read


def compute_monthly_stats(frame: pd.DataFrame) -> List[MonthlyStat]:
    if frame.empty:
        return []
    monthly = (
        frame.groupby("month", sort=True)
        .agg(requests=("status", "size"), closed=("closed", "sum"))
        .reset_index()
    )
    return [
        MonthlyStat.from_counts(str(month), int(requests), int(closed))
        for month, requests, closed in monthly.itertuples(index=False, name=None)
    ]


def compute_department_stats(frame: pd.DataFrame) -> List[DepartmentStat]:
    if frame.empty:
        return []
    counts = (
        frame.groupby(["department", "status", "month"], sort=False)
        .size()
        .reset_index(name="count")
        .sort_values(DEPARTMENT_ORDER, kind="mergesort")
    )
    return [
        DepartmentStat(department=str(department), status=str(status), month=str(month), count=int(count))
        for department, status, month, count in counts.itertuples(index=False, name=None)
    ]


def aggregate_rows(rows: Iterable[Tuple[int, Sequence[object]]]) -> AggregationResult:
    frame, skipped, rows_read = build_request_frame(rows)
    result = AggregationResult(
        monthly_stats=compute_monthly_stats(frame),
        department_stats=compute_department_stats(frame),
        skipped=skipped,
        rows_read=rows_read,
    )
    logger.info(
        "aggregated %d of %d rows into %d months (%d skipped)",
        result.rows_aggregated,
        rows_read,
        len(result.monthly_stats),
        len(skipped),
    )
    return result


def aggregate(file_bytes: bytes) -> AggregationResult:
    """Aggregate the first worksheet of an XLSX workbook."""
    return aggregate_rows(iter_data_rows(read_sheet(file_bytes)))
