#!/usr/bin/env python3
"""
Pwned List — Entry Point
========================

Checks Pwned Password list files for format errors and searches them for a
SHA-1 hash by binary search.

Usage:
    python main.py check [--progress] <file>...
    python main.py search --hash <SHA-1 hash of password> <file>...

With no files, the paths in PWNED_LIST_FILES (os.pathsep-separated) are used.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from pwned_list.checker import check_file
from pwned_list.config import load_settings
from pwned_list.exceptions import PwnedListError
from pwned_list.models import format_count
from pwned_list.record import parse_search_key
from pwned_list.searcher import search_file


# ─── ANSI Constants ─────────────────────────────────────────────────

_RED = "\033[91m"
_GREEN = "\033[92m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_SAVE_CURSOR = "\033[s"
_RESTORE_CURSOR = "\033[u"
_CLEAR_LINE = "\033[K"


# ─── Progress Rendering ─────────────────────────────────────────────


class TerminalProgress:
    """Redraws the running record count in place after the status prefix."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def start(self) -> None:
        self.stream.write(_SAVE_CURSOR)
        self.stream.flush()

    def __call__(self, count: int) -> None:
        self.stream.write(f"{_RESTORE_CURSOR}{_CLEAR_LINE}{format_count(count)} ")
        self.stream.flush()


# ─── Commands ───────────────────────────────────────────────────────


def run_check(paths: list[str], progress: bool) -> int:
    """Check every file; returns 1 if any of them failed."""
    failures = 0
    for path in paths:
        print(f'checking file "{path}": ', end="", flush=True)
        renderer = None
        if progress:
            renderer = TerminalProgress()
            renderer.start()

        report = check_file(path, renderer)
        if report.is_valid:
            count = "" if progress else f"{report.display_count} "
            print(f"{count}{_GREEN}OK{_RESET}")
        else:
            failures += 1
            print(f"{_RED}{report.message}{_RESET}")

    return 1 if failures else 0


def run_search(paths: list[str], hash_string: str) -> int:
    """Search files in order; stops at the first match or the first error."""
    try:
        key = parse_search_key(hash_string)
    except PwnedListError as exc:
        print(f"{_RED}error: {exc}{_RESET}")
        return 1

    for path in paths:
        print(f'searching file "{path}": ', end="", flush=True)
        try:
            result = search_file(path, key)
        except (PwnedListError, OSError) as exc:
            print(f"{_RED}error: {exc}{_RESET}")
            return 1

        if result.found:
            print(
                f"{_BOLD}hash {result.ordinal} matched!{_RESET} "
                f"(byte offset {result.byte_offset})"
            )
            return 0
        print("no match.")

    return 0


# ─── Main ────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwned",
        description="A tool to search the Pwned Password list efficiently",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser(
        "check",
        help="Checks files to be the correct Pwned Password list format",
    )
    check.add_argument(
        "-p", "--progress",
        action="store_true",
        help="Show progress within the files.",
    )
    check.add_argument("files", nargs="*", metavar="file")

    search = commands.add_parser(
        "search",
        help="Runs a binary search for a hash in the Pwned Password list",
    )
    search.add_argument(
        "--hash",
        required=True,
        dest="hash_string",
        help="SHA-1 hash to look for (in uppercase hexadecimal notation)",
    )
    search.add_argument("files", nargs="*", metavar="file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the chosen command, and return the exit status."""
    parser = _build_parser()
    try:
        settings = load_settings()
    except ValidationError as exc:
        problems = "; ".join(error["msg"] for error in exc.errors())
        parser.error(f"invalid configuration: {problems}")

    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    args = parser.parse_args(argv)

    paths = args.files or settings.list_paths
    if not paths:
        parser.error("no list files given (pass them or set PWNED_LIST_FILES)")

    if args.command == "check":
        return run_check(paths, args.progress)
    return run_search(paths, args.hash_string)


if __name__ == "__main__":
    sys.exit(main())
