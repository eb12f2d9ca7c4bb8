"""
Pwned List — FastAPI Server
===========================

HTTP access to the configured Pwned Password list files.

Endpoints:
    POST /search            Binary-search the list files for a SHA-1 hash
    POST /check             Check every configured file's record format
    GET  /health            Health check / readiness probe

Run:
    PWNED_LIST_FILES=pwned-passwords.txt uvicorn api:app --reload

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from pwned_list import __version__
from pwned_list.checker import check_files
from pwned_list.config import Settings, load_settings
from pwned_list.exceptions import PwnedListError
from pwned_list.models import CheckReport, SearchResult
from pwned_list.searcher import search_files

logger = logging.getLogger(__name__)


# ─── Application Lifespan (load settings) ───────────────────────────

_settings: Settings | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Read PWNED_* settings once on startup."""
    global _settings  # noqa: PLW0603
    _settings = load_settings()
    yield
    _settings = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Pwned List API",
    description=(
        "Binary search and strict format checking of sorted Pwned Password "
        "list files, without ever loading them into memory."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class SearchRequest(BaseModel):
    """Request body for the /search endpoint."""

    hash: str = Field(
        ...,
        pattern=r"^[0-9A-F]{40}$",
        description="SHA-1 hash of the password, uppercase hexadecimal.",
        json_schema_extra={"example": "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8"},
    )


class SearchResponse(BaseModel):
    """Where (if anywhere) the hash was found."""

    hash: str
    found: bool
    file: Optional[str] = None
    ordinal: Optional[int] = Field(default=None, description="1-based line number")
    byte_offset: Optional[int] = None
    files_searched: int


class CheckResponse(BaseModel):
    """Per-file check reports for every configured list file."""

    all_valid: bool
    reports: list[CheckReport]


class HealthResponse(BaseModel):
    status: str
    version: str
    files_configured: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_settings() -> Settings:
    if _settings is None:
        raise HTTPException(status_code=503, detail="Settings not loaded")
    return _settings


def _list_paths() -> list[str]:
    paths = _get_settings().list_paths
    if not paths:
        raise HTTPException(status_code=503, detail="No list files configured")
    return paths


def _run_search(paths: list[str], key: str) -> list[SearchResult]:
    return list(search_files(paths, key))


def _build_search_response(key: str, results: list[SearchResult]) -> SearchResponse:
    last = results[-1] if results else None
    if last is not None and last.found:
        return SearchResponse(
            hash=key,
            found=True,
            file=last.path,
            ordinal=last.ordinal,
            byte_offset=last.byte_offset,
            files_searched=len(results),
        )
    return SearchResponse(hash=key, found=False, files_searched=len(results))


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/search",
    summary="Search the list files for a SHA-1 hash",
    tags=["Search"],
    responses={
        500: {"description": "A list file could not be searched"},
        503: {"description": "No list files configured"},
    },
)
async def search_hash(request: SearchRequest) -> SearchResponse:
    """Binary-search each configured file in order, stopping at the first match.

    A miss is a normal response (`found: false`), not an error.
    """
    paths = _list_paths()
    try:
        results = await asyncio.to_thread(_run_search, paths, request.hash)
    except (PwnedListError, OSError) as exc:
        logger.error("Search failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return _build_search_response(request.hash, results)


@app.post(
    "/check",
    summary="Check the record format of every list file",
    tags=["Check"],
    responses={503: {"description": "No list files configured"}},
)
async def check_lists() -> CheckResponse:
    """Stream every configured file and report the first bad record, if any.

    This reads each file end to end and is slow on the full list.
    """
    paths = _list_paths()
    reports = await asyncio.to_thread(lambda: list(check_files(paths)))
    return CheckResponse(
        all_valid=all(r.is_valid for r in reports),
        reports=reports,
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Settings not loaded"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    settings = _get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        files_configured=len(settings.list_paths),
    )
