"""
Binary search over a sorted list file that stays on disk.

The file is treated as a sorted array of 42-byte records: record i lives at
byte offset i*42, so any key is one seek + one read away. bisect_left runs
over a lazy view whose items are read from disk on demand, giving the
lower bound (first key >= target) in O(log n) probes and O(1) memory.
A final re-read of the candidate decides match / no match.
"""

from __future__ import annotations

import bisect
import logging
import os
from collections.abc import Iterable, Iterator
from typing import BinaryIO

from .exceptions import SizeMisalignmentError, TruncatedRecordError
from .models import RECORD_SIZE, SearchResult
from .record import parse_search_key, read_record, record_key, record_offset

logger = logging.getLogger(__name__)


class _DiskKeys:
    """Read-only sequence of record keys, fetched by seek + read."""

    def __init__(self, stream: BinaryIO, record_count: int):
        self._stream = stream
        self._record_count = record_count
        self.probes = 0

    def __len__(self) -> int:
        return self._record_count

    def __getitem__(self, index: int) -> bytes:
        self.probes += 1
        return self.read_key(index)

    def read_key(self, index: int) -> bytes:
        self._stream.seek(record_offset(index), os.SEEK_SET)
        record = read_record(self._stream)
        if len(record) < RECORD_SIZE:
            raise TruncatedRecordError(index + 1, len(record))
        return record_key(record)


def search_stream(
    stream: BinaryIO,
    key: str | bytes,
    *,
    size: int | None = None,
    path: str = "<stream>",
) -> SearchResult:
    """Search a seekable binary stream of sorted records for ``key``.

    Args:
        stream: Seekable binary stream holding the whole list.
        key: 40-character uppercase hex hash.
        size: Stream length in bytes; measured by seeking to the end if omitted.
        path: Label recorded in the result.

    Returns:
        SearchResult; ``index`` is None when the key is not in the list.

    Raises:
        InvalidSearchKeyError: the key is not 40 chars of [0-9A-F].
        SizeMisalignmentError: the length is not a multiple of 42.
        TruncatedRecordError: a probe read came back short.
        OSError: any seek or read failure.
    """
    target = parse_search_key(key)

    if size is None:
        size = stream.seek(0, os.SEEK_END)
    if size % RECORD_SIZE != 0:
        raise SizeMisalignmentError(size)

    keys = _DiskKeys(stream, size // RECORD_SIZE)
    candidate = bisect.bisect_left(keys, target)
    logger.debug(
        "%s: lower bound %d of %d after %d probes",
        path, candidate, len(keys), keys.probes,
    )

    index = None
    if candidate < len(keys) and keys.read_key(candidate) == target:
        index = candidate

    return SearchResult(
        path=path,
        key=target.decode("ascii"),
        index=index,
        probes=keys.probes,
        record_count=len(keys),
    )


def search_file(path: str | os.PathLike[str], key: str | bytes) -> SearchResult:
    """Search one list file; every failure propagates to the caller."""
    name = os.fspath(path)
    logger.info("Searching %s...", name)
    with open(name, "rb") as stream:
        size = os.fstat(stream.fileno()).st_size
        result = search_stream(stream, key, size=size, path=name)

    if result.found:
        logger.info("%s: match at record %d", name, result.ordinal)
    else:
        logger.info("%s: no match", name)
    return result


def search_files(
    paths: Iterable[str | os.PathLike[str]], key: str | bytes
) -> Iterator[SearchResult]:
    """Search files in order, stopping after the first match.

    Yields one result per file searched. The first error aborts the run.
    """
    for path in paths:
        result = search_file(path, key)
        yield result
        if result.found:
            return
