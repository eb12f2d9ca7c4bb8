"""
Custom exception hierarchy for list checking and searching.

Each exception type maps to one ErrorKind, so callers can report a
machine-readable code alongside the human-readable message.
I/O failures are not wrapped: they surface as the built-in OSError.
"""

from __future__ import annotations

from .models import ErrorKind


class PwnedListError(Exception):
    """Base exception for all list format and search failures."""

    def __init__(self, code: ErrorKind, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class RecordFormatError(PwnedListError):
    """A record at a known 1-based position is malformed."""

    def __init__(
        self,
        code: ErrorKind,
        record_number: int,
        message: str,
        details: dict | None = None,
    ):
        self.record_number = record_number
        super().__init__(code, message, details)


class InvalidCharacterError(RecordFormatError):
    """The key region holds a byte outside [0-9A-F]."""

    def __init__(self, record_number: int):
        super().__init__(
            ErrorKind.INVALID_CHARACTER,
            record_number,
            f"hash {record_number} contained characters other than [0-9A-F]",
        )


class MissingTerminatorError(RecordFormatError):
    """Bytes 40-41 of the record are not CR + LF."""

    def __init__(self, record_number: int):
        super().__init__(
            ErrorKind.MISSING_TERMINATOR,
            record_number,
            f"hash {record_number} didn't end with CR + LF",
        )


class TruncatedRecordError(RecordFormatError):
    """The stream ended partway through a record."""

    def __init__(self, record_number: int, bytes_read: int):
        super().__init__(
            ErrorKind.TRUNCATED_RECORD,
            record_number,
            f"hash {record_number} is truncated ({bytes_read} of 42 bytes)",
            {"bytes_read": bytes_read},
        )


class SizeMisalignmentError(PwnedListError):
    """The file length is not a whole number of records."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(
            ErrorKind.SIZE_MISALIGNED,
            "file size not a multiple of 42",
            {"size": size},
        )


class InvalidSearchKeyError(PwnedListError):
    """The search key is not a 40-character uppercase hex string."""

    def __init__(self, key: str):
        super().__init__(
            ErrorKind.INVALID_SEARCH_KEY,
            f"search key {key!r} is not 40 characters of [0-9A-F]",
            {"key": key},
        )
