"""
Pydantic models for check and search outcomes.

Results cross the boundary to the CLI and the HTTP API as typed models,
never as loose tuples or dicts.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

RECORD_SIZE = 42


# ─── Error Kinds ────────────────────────────────────────────────────


class ErrorKind(str, Enum):
    """Machine-readable failure category."""

    INVALID_CHARACTER = "INVALID_CHARACTER"  # Key byte outside [0-9A-F]
    MISSING_TERMINATOR = "MISSING_TERMINATOR"  # Bytes 40-41 are not CR + LF
    TRUNCATED_RECORD = "TRUNCATED_RECORD"  # Stream ended inside a record
    SIZE_MISALIGNED = "SIZE_MISALIGNED"  # File length not a multiple of 42
    INVALID_SEARCH_KEY = "INVALID_SEARCH_KEY"
    IO_ERROR = "IO_ERROR"


def format_count(count: int) -> str:
    """Abbreviate a record count: 1234 -> '1K', 2500000 -> '2M'."""
    if count >= 1_000_000:
        return f"{count // 1_000_000}M"
    if count >= 1_000:
        return f"{count // 1_000}K"
    return str(count)


# ─── Check Report ───────────────────────────────────────────────────


class CheckReport(BaseModel):
    """Outcome of checking one list file."""

    path: str
    is_valid: bool
    record_count: int = 0  # Records that passed before any failure
    failed_record: Optional[int] = None  # 1-based ordinal of the bad record
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def display_count(self) -> str:
        return format_count(self.record_count)


# ─── Search Result ──────────────────────────────────────────────────


class SearchResult(BaseModel):
    """Outcome of a binary search over one list file.

    ``index`` is 0-based; humans get ``ordinal`` (the line number) and
    ``byte_offset`` (where that line starts).
    """

    path: str
    key: str
    index: Optional[int] = None
    probes: int = 0
    record_count: int = Field(default=0, ge=0)

    @property
    def found(self) -> bool:
        return self.index is not None

    @property
    def ordinal(self) -> Optional[int]:
        return None if self.index is None else self.index + 1

    @property
    def byte_offset(self) -> Optional[int]:
        return None if self.index is None else self.index * RECORD_SIZE
