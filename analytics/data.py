from __future__ import annotations

import io
import logging
import re
from datetime import date, datetime, time
from typing import Iterator, List, Sequence, Tuple

import pandas as pd

from analytics.errors import MalformedDate, MalformedRow, SourceUnreadable
from analytics.models import RequestRecord


logger = logging.getLogger(__name__)

# Fixed worksheet layout (0-based column positions).
STATUS_COL = 2
DEPARTMENT_COL = 7
REQUESTED_AT_COL = 9
MIN_COLUMNS = REQUESTED_AT_COL + 1

CLOSED_STATUS = "종료"
MONTH_KEY_LENGTH = 7

_ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")


# ---------------- Row source ----------------
def read_sheet(file_bytes: bytes) -> pd.DataFrame:
    """Read the first worksheet with no header inference and untyped cells."""
    if not file_bytes:
        raise SourceUnreadable("uploaded workbook is empty")
    try:
        # No NA inference: "NA", "None", "null" are real department/status text.
        sheet = pd.read_excel(
            io.BytesIO(file_bytes),
            sheet_name=0,
            header=None,
            dtype=object,
            engine="openpyxl",
            keep_default_na=False,
            na_filter=False,
        )
    except Exception as exc:
        raise SourceUnreadable(f"cannot open workbook: {exc}") from exc
    logger.debug("read worksheet with %d rows and %d columns", len(sheet), len(sheet.columns))
    return sheet


def iter_data_rows(sheet: pd.DataFrame) -> Iterator[Tuple[int, List[object]]]:
    """Yield (row_number, cells) for every row after the header.

    Row numbers are 1-based positions in the parsed sheet, so the header is
    row 1 and the first data row is row 2.
    """
    for offset, cells in enumerate(sheet.itertuples(index=False, name=None)):
        if offset == 0:
            continue
        yield offset + 1, list(cells)


# ---------------- Field extraction ----------------
def cell_text(value: object) -> str:
    """Display form of a cell value; never fails."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        if pd.isna(value):
            return ""
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return value
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def extract_record(cells: Sequence[object], row_number: int) -> RequestRecord:
    if len(cells) < MIN_COLUMNS:
        raise MalformedRow(row_number, "missing column")
    return RequestRecord(
        timestamp=cell_text(cells[REQUESTED_AT_COL]),
        status=cell_text(cells[STATUS_COL]),
        department=cell_text(cells[DEPARTMENT_COL]),
    )


def month_key(timestamp: str, row_number: int) -> str:
    """Return the `YYYY-MM` prefix of the timestamp's date token."""
    tokens = [token for token in _ASCII_WHITESPACE.split(timestamp) if token]
    if not tokens:
        raise MalformedDate(row_number, timestamp)
    date_token = tokens[0]
    if len(date_token) < MONTH_KEY_LENGTH:
        raise MalformedDate(row_number, timestamp)
    return date_token[:MONTH_KEY_LENGTH]


def is_closed(status: str) -> bool:
    return status == CLOSED_STATUS
