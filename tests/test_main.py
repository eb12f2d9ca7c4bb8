"""
Command-line tests: output lines and exit codes of `check` and `search`.
"""

from __future__ import annotations

import io

import pytest

import main

A, B, C = (b"A" * 40, b"B" * 40, b"C" * 40)


@pytest.fixture(autouse=True)
def _no_configured_files(monkeypatch):
    monkeypatch.delenv("PWNED_LIST_FILES", raising=False)
    monkeypatch.delenv("PWNED_LOG_LEVEL", raising=False)


class TestCheckCommand:
    def test_ok_file(self, write_list, capsys) -> None:
        path = write_list([A, B, C])
        assert main.main(["check", str(path)]) == 0
        out = capsys.readouterr().out
        assert f'checking file "{path}": 3 ' in out
        assert "OK" in out

    def test_bad_file_then_good_file(self, write_list, capsys) -> None:
        bad = write_list([A, b"b" * 40], name="bad.txt")
        good = write_list([A], name="good.txt")
        assert main.main(["check", str(bad), str(good)]) == 1
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert "hash 2 contained characters other than [0-9A-F]" in lines[0]
        assert "OK" in lines[1]

    def test_progress_mode(self, write_list, capsys) -> None:
        path = write_list([A, B, C])
        assert main.main(["check", "--progress", str(path)]) == 0
        out = capsys.readouterr().out
        assert "\033[s" in out
        assert "\033[u\033[K3 " in out

    def test_files_from_environment(self, write_list, capsys, monkeypatch) -> None:
        path = write_list([A])
        monkeypatch.setenv("PWNED_LIST_FILES", str(path))
        assert main.main(["check"]) == 0
        assert str(path) in capsys.readouterr().out

    def test_bad_log_level_is_usage_error(self, write_list, monkeypatch, capsys) -> None:
        monkeypatch.setenv("PWNED_LOG_LEVEL", "LOUD")
        with pytest.raises(SystemExit) as info:
            main.main(["check", str(write_list([A]))])
        assert info.value.code == 2
        assert "Unknown log level: 'LOUD'" in capsys.readouterr().err

    def test_no_files_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as info:
            main.main(["check"])
        assert info.value.code == 2


class TestSearchCommand:
    def test_match(self, write_list, capsys) -> None:
        path = write_list([A, B, C])
        assert main.main(["search", "--hash", "B" * 40, str(path)]) == 0
        out = capsys.readouterr().out
        assert "hash 2 matched!" in out
        assert "(byte offset 42)" in out

    def test_no_match_moves_to_next_file(self, write_list, capsys) -> None:
        first = write_list([A], name="1.txt")
        second = write_list([A, C], name="2.txt")
        assert main.main(["search", "--hash", "C" * 40, str(first), str(second)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].endswith("no match.")
        assert "hash 2 matched!" in lines[1]

    def test_error_aborts(self, write_list, capsys) -> None:
        broken = write_list([], name="broken.txt", raw=b"A" * 41)
        good = write_list([A], name="good.txt")
        assert main.main(["search", "--hash", "A" * 40, str(broken), str(good)]) == 1
        out = capsys.readouterr().out
        assert "error: file size not a multiple of 42" in out
        assert "good.txt" not in out

    def test_invalid_hash(self, write_list, capsys) -> None:
        path = write_list([A])
        assert main.main(["search", "--hash", "a" * 40, str(path)]) == 1
        assert "error:" in capsys.readouterr().out

    def test_hash_is_required(self, write_list) -> None:
        with pytest.raises(SystemExit):
            main.main(["search", str(write_list([A]))])


class TestTerminalProgress:
    def test_renders_in_place(self) -> None:
        buffer = io.StringIO()
        progress = main.TerminalProgress(buffer)
        progress.start()
        progress(999)
        progress(2_000)
        assert buffer.getvalue() == "\033[s\033[u\033[K999 \033[u\033[K2K "
