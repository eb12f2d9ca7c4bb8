"""
The 42-byte record format of the Pwned Password list.

A record is 40 uppercase hex characters (a SHA-1 hash) followed by CR + LF.
The rule is strict and case-sensitive: lowercase hex is a violation,
not a variant.
"""

from __future__ import annotations

import re
from typing import BinaryIO

from .exceptions import InvalidSearchKeyError
from .models import RECORD_SIZE, ErrorKind

KEY_SIZE = 40
TERMINATOR = b"\r\n"

_KEY_PATTERN = re.compile(rb"[0-9A-F]{40}")


def check_record(record: bytes) -> ErrorKind | None:
    """Return the first violated rule for one record, or None if it is valid.

    Key characters are checked before the terminator.
    """
    if len(record) < RECORD_SIZE:
        return ErrorKind.TRUNCATED_RECORD
    if _KEY_PATTERN.fullmatch(record, 0, KEY_SIZE) is None:
        return ErrorKind.INVALID_CHARACTER
    if record[KEY_SIZE:RECORD_SIZE] != TERMINATOR:
        return ErrorKind.MISSING_TERMINATOR
    return None


def is_valid_record(record: bytes) -> bool:
    return check_record(record) is None


def record_key(record: bytes) -> bytes:
    """The sort key: raw bytes 0-39, ordered byte-wise."""
    return bytes(record[:KEY_SIZE])


def record_offset(index: int) -> int:
    return index * RECORD_SIZE


def parse_search_key(key: str | bytes) -> bytes:
    """Normalize a caller-supplied hash to the bytes stored in the list.

    Raises:
        InvalidSearchKeyError: unless the key is exactly 40 chars of [0-9A-F].
    """
    if isinstance(key, str):
        text = key.strip()
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError:
            raise InvalidSearchKeyError(text) from None
    else:
        raw = key.strip()
        text = raw.decode("ascii", errors="replace")

    if _KEY_PATTERN.fullmatch(raw) is None:
        raise InvalidSearchKeyError(text)
    return raw


def read_record(stream: BinaryIO) -> bytes:
    """Read one record's worth of bytes.

    Short reads are retried until 42 bytes arrive or the stream ends, so a
    result shorter than 42 bytes always means end-of-stream. Returns b"" at a
    clean end.
    """
    chunk = stream.read(RECORD_SIZE)
    while chunk and len(chunk) < RECORD_SIZE:
        more = stream.read(RECORD_SIZE - len(chunk))
        if not more:
            break
        chunk += more
    return chunk
