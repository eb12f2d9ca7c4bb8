"""Pytest configuration — ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture
def write_list(tmp_path):
    """Write records (keys, or raw bytes) to a list file and return its path."""

    def _write(keys, name: str = "pwned.txt", raw: bytes | None = None) -> Path:
        path = tmp_path / name
        if raw is None:
            raw = b"".join(key + b"\r\n" for key in keys)
        path.write_bytes(raw)
        return path

    return _write
