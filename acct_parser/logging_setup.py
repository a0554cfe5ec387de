"""Diagnostic logging for ``acct-parser``.

Everything the user is meant to read (``Correcting ...``, line errors, the
statistics block) is printed by :class:`acct_parser.reporter.Reporter`.
Logging carries the developer trace: which backup path was chosen, each raw
input line and its outcome, and tracebacks for failed lines. It is silent
unless asked for, so the default level is ``WARNING`` and
``--log-level DEBUG`` (or ``ACCT_PARSER_LOG_LEVEL=DEBUG``) turns the trace on.

Modules log through ``get_logger("acct_parser.<module>")``. Only the CLI calls
:func:`configure_logging`; tests call :func:`reset_logging` between runs.
"""

from __future__ import annotations

import logging
import os
from typing import IO

_PKG_LOGGER_NAME = "acct_parser"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False
_HANDLER: logging.Handler | None = None

LOG_LEVEL_ENV = "ACCT_PARSER_LOG_LEVEL"


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None or not level.strip():
        env_val = os.getenv(LOG_LEVEL_ENV)
        return _parse_level(env_val) if env_val else logging.WARNING
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        raise ValueError(f"unknown log level: {name!r}")
    return numeric


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send ``acct_parser.*`` records to ``stream`` (stderr by default).

    ``level`` is a number or a name such as ``"debug"``; when omitted,
    ``$ACCT_PARSER_LOG_LEVEL`` is used, then ``WARNING``. An unknown name
    raises ``ValueError`` and leaves logging unconfigured. Later calls are
    no-ops until :func:`reset_logging`.
    """

    global _CONFIGURED, _HANDLER
    if _CONFIGURED:
        return

    numeric_level = _parse_level(level)
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(pkg_logger.handlers):
        if isinstance(h, logging.NullHandler):
            pkg_logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    pkg_logger.setLevel(numeric_level)
    pkg_logger.addHandler(handler)
    # Records stop here; the root logger would print them a second time.
    pkg_logger.propagate = False

    _HANDLER = handler
    _CONFIGURED = True


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging`."""

    global _CONFIGURED, _HANDLER
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _HANDLER is not None:
        pkg_logger.removeHandler(_HANDLER)
        _HANDLER.close()
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    _HANDLER = None
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``.

    Until :func:`configure_logging` runs, the package logger holds a
    ``NullHandler`` so importing the library prints nothing.
    """

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
