from __future__ import annotations

import io
import logging

import pytest

from acct_parser.logging_setup import configure_logging, get_logger, reset_logging


def test_default_level_is_warning():
    stream = io.StringIO()
    configure_logging(stream=stream)

    get_logger("acct_parser.test").info("hidden")
    get_logger("acct_parser.test").warning("shown")

    assert "hidden" not in stream.getvalue()
    assert "acct_parser.test WARNING shown" in stream.getvalue()


def test_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("ACCT_PARSER_LOG_LEVEL", "debug")

    configure_logging(stream=io.StringIO())

    assert logging.getLogger("acct_parser").level == logging.DEBUG


@pytest.mark.parametrize(("level", "expected"), [("INFO", logging.INFO), ("15", 15), (10, 10)])
def test_explicit_level_accepts_names_and_numbers(level, expected):
    configure_logging(level, stream=io.StringIO())

    assert logging.getLogger("acct_parser").level == expected


def test_unknown_level_leaves_logging_unconfigured():
    with pytest.raises(ValueError, match="unknown log level: 'CHATTY'"):
        configure_logging("chatty")

    configure_logging("error", stream=io.StringIO())
    assert logging.getLogger("acct_parser").level == logging.ERROR


def test_second_configure_is_ignored_until_reset():
    first, second = io.StringIO(), io.StringIO()
    configure_logging("info", stream=first)
    configure_logging("debug", stream=second)

    get_logger("acct_parser.test").info("one")
    reset_logging()
    configure_logging("info", stream=second)
    get_logger("acct_parser.test").info("two")

    assert "one" in first.getvalue() and "two" not in first.getvalue()
    assert "two" in second.getvalue() and "one" not in second.getvalue()


def test_unconfigured_package_logger_is_silent(capsys):
    get_logger("acct_parser.test").warning("nobody listening")

    pkg_logger = logging.getLogger("acct_parser")
    assert any(isinstance(h, logging.NullHandler) for h in pkg_logger.handlers)
    assert capsys.readouterr().err == ""
