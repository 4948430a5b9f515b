"""Unit tests for the workbook reader and per-row field extraction.

Each case focuses on one rule of the fixed worksheet layout so regressions in
cell coercion or month-key derivation are easy to diagnose.
"""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd
import pytest

from analytics.data import cell_text, extract_record, is_closed, iter_data_rows, month_key, read_sheet
from analytics.errors import MalformedDate, MalformedRow, SourceUnreadable


def test_cell_text_empty_values_become_empty_strings() -> None:
    assert cell_text(None) == ""
    assert cell_text(float("nan")) == ""
    assert cell_text(pd.NaT) == ""
    assert cell_text(pd.NA) == ""


def test_cell_text_numbers_use_display_form() -> None:
    """Integral floats drop the fractional part, other numbers keep it."""
    assert cell_text(3.0) == "3"
    assert cell_text(2.5) == "2.5"
    assert cell_text(101) == "101"


def test_cell_text_dates_and_strings() -> None:
    assert cell_text(datetime(2024, 1, 5, 10, 30)) == "2024-01-05 10:30:00"
    assert cell_text(pd.Timestamp("2024-03-02 08:00:00")) == "2024-03-02 08:00:00"
    assert cell_text(date(2024, 4, 1)) == "2024-04-01"
    assert cell_text("종료") == "종료"
    assert cell_text(True) == "True"


def test_extract_record_reads_fixed_positions(make_row) -> None:
    record = extract_record(make_row("2024-01-03 09:00", "진행", "인사팀"), row_number=2)
    assert record.timestamp == "2024-01-03 09:00"
    assert record.status == "진행"
    assert record.department == "인사팀"


def test_extract_record_rejects_short_rows() -> None:
    with pytest.raises(MalformedRow) as excinfo:
        extract_record(["a", "b", "c"], row_number=5)
    assert excinfo.value.row == 5
    assert excinfo.value.reason == "missing column"


@pytest.mark.parametrize(
    ("timestamp", "expected"),
    [
        ("2024-01 10:00", "2024-01"),
        ("2024-01-15 10:00:00", "2024-01"),
        ("2024-01-15T10:00:00", "2024-01"),
        ("   2024-03-01   09:00", "2024-03"),
        ("2024-02-01\t10:00", "2024-02"),
        ("2024-12", "2024-12"),
    ],
)
def test_month_key_takes_first_seven_characters_of_date_token(timestamp: str, expected: str) -> None:
    assert month_key(timestamp, row_number=2) == expected


@pytest.mark.parametrize("timestamp", ["", "   ", "2024-1 10:00", "N/A"])
def test_month_key_rejects_missing_or_short_tokens(timestamp: str) -> None:
    with pytest.raises(MalformedDate) as excinfo:
        month_key(timestamp, row_number=7)
    assert excinfo.value.row == 7
    assert excinfo.value.value == timestamp


def test_closed_status_is_an_exact_match() -> None:
    assert is_closed("종료")
    assert not is_closed("종료 ")
    assert not is_closed("closed")
    assert not is_closed("")


def test_read_sheet_rejects_empty_and_garbage_bytes() -> None:
    with pytest.raises(SourceUnreadable):
        read_sheet(b"")
    with pytest.raises(SourceUnreadable):
        read_sheet(b"this is not a workbook")


def test_iter_data_rows_skips_header_and_numbers_rows(make_workbook, example_rows) -> None:
    sheet = read_sheet(make_workbook(example_rows))
    rows = list(iter_data_rows(sheet))

    assert [number for number, _ in rows] == [2, 3, 4]
    assert rows[0][1][9] == "2024-01 10:00"
    assert len(rows[0][1]) == 10
