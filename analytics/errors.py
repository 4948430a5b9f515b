"""Exceptions raised while reading and aggregating request workbooks."""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base exception for all request analytics errors."""


class SourceUnreadable(AnalyticsError):
    """Raised when the uploaded bytes cannot be opened as a workbook."""


class RowError(AnalyticsError):
    """A single worksheet row could not be turned into a request record."""

    def __init__(self, row: int, message: str) -> None:
        super().__init__(f"row {row}: {message}")
        self.row = row


class MalformedRow(RowError):
    def __init__(self, row: int, reason: str = "missing column") -> None:
        super().__init__(row, reason)
        self.reason = reason


class MalformedDate(RowError):
    def __init__(self, row: int, value: str) -> None:
        super().__init__(row, f"unusable request date {value!r}")
        self.value = value


class UploadTooLarge(AnalyticsError):
    """Raised when an uploaded workbook exceeds the configured size limit."""
