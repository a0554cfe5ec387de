"""Pytest configuration for test isolation.

The CLI and settings read ``ACCT_PARSER_*`` variables, a ``.env`` in the
working directory, ``./account.properties``, and ``~/.config/acct-parser``.
To keep tests hermetic, every test runs in its own temporary working
directory with a throwaway ``HOME`` and a clean ``ACCT_PARSER_*``
environment, and package logging is reset afterwards.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from acct_parser.logging_setup import reset_logging

_ENV_VARS = (
    "ACCT_PARSER_ACCOUNTS",
    "ACCT_PARSER_ENCODING",
    "ACCT_PARSER_BACKUP_EXT",
    "ACCT_PARSER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", os.fspath(home))
    # setenv before delenv so values loaded from a test's .env are also undone.
    for var in _ENV_VARS:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    yield
    reset_logging()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write ``lines`` (newline-terminated) to ``tmp_path/name`` and return the path."""

    def _write(name: str, *lines: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def catalog_file(write_file: Callable[..., Path]) -> Path:
    return write_file("account.properties", "Checking=DEBIT CARD", "Savings=XFER")
