"""
Streaming format checker: is this really the list?

The file is read front to back one record at a time; nothing is kept
but the current 42 bytes. The first bad record ends the check:

  - INVALID_CHARACTER   key byte outside [0-9A-F]
  - MISSING_TERMINATOR  record doesn't end with CR + LF
  - TRUNCATED_RECORD    file ends partway through a record

check_stream() raises on the first failure; check_file() turns the outcome
into a CheckReport so a batch of files can keep going.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from typing import BinaryIO

from .exceptions import (
    InvalidCharacterError,
    MissingTerminatorError,
    RecordFormatError,
    TruncatedRecordError,
)
from .models import CheckReport, ErrorKind, format_count
from .record import check_record, read_record

__all__ = ["check_file", "check_files", "check_stream", "format_count"]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

# Progress fires every record, then every 1K, then every 1M.
_INTERVAL_STEP = 1_000
_MAX_INTERVAL = 1_000_000


def check_stream(stream: BinaryIO, on_progress: ProgressCallback | None = None) -> int:
    """Check every record of a binary stream, from its current position.

    Args:
        stream: Readable binary stream positioned at the first record.
        on_progress: Called with the running record count at adaptive
            intervals (every record below 1,000, every 1,000 below
            1,000,000, every 1,000,000 after that).

    Returns:
        The number of records checked.

    Raises:
        InvalidCharacterError, MissingTerminatorError, TruncatedRecordError:
            for the first malformed record; later records are not read.
        OSError: on any read failure; its ``records_checked`` attribute holds
            the number of records that passed before it.
    """
    count = 0
    interval = 1

    while True:
        try:
            record = read_record(stream)
        except OSError as exc:
            exc.records_checked = count
            raise
        if not record:
            return count

        number = count + 1
        problem = check_record(record)
        if problem is ErrorKind.TRUNCATED_RECORD:
            raise TruncatedRecordError(number, len(record))
        if problem is ErrorKind.INVALID_CHARACTER:
            raise InvalidCharacterError(number)
        if problem is ErrorKind.MISSING_TERMINATOR:
            raise MissingTerminatorError(number)
        count = number

        if on_progress is not None and count % interval == 0:
            if count // interval == _INTERVAL_STEP and interval < _MAX_INTERVAL:
                interval *= _INTERVAL_STEP
            on_progress(count)


def check_file(
    path: str | os.PathLike[str],
    on_progress: ProgressCallback | None = None,
) -> CheckReport:
    """Check one list file and report the outcome.

    Format violations and I/O failures (including a missing file) become a
    failed CheckReport; they are never raised.
    """
    name = os.fspath(path)
    logger.info("Checking %s...", name)

    try:
        with open(name, "rb") as stream:
            count = check_stream(stream, on_progress)
    except RecordFormatError as exc:
        logger.warning("%s: %s", name, exc)
        return CheckReport(
            path=name,
            is_valid=False,
            record_count=exc.record_number - 1,
            failed_record=exc.record_number,
            error_kind=exc.code,
            message=str(exc),
        )
    except OSError as exc:
        logger.warning("%s: %s", name, exc)
        return CheckReport(
            path=name,
            is_valid=False,
            record_count=getattr(exc, "records_checked", 0),
            error_kind=ErrorKind.IO_ERROR,
            message=str(exc),
        )

    logger.info("%s: %s records OK", name, format_count(count))
    return CheckReport(path=name, is_valid=True, record_count=count)


def check_files(
    paths: Iterable[str | os.PathLike[str]],
    on_progress: ProgressCallback | None = None,
) -> Iterator[CheckReport]:
    """Check each file in order; a failed file never stops the next one."""
    for path in paths:
        yield check_file(path, on_progress)
