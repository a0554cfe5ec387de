"""Exception hierarchy for ``acct_parser``.

Two severities are kept apart:

- :class:`CatalogLoadError` and :class:`ConfigError` abort the whole process;
  the CLI reports them and exits non-zero.
- :class:`RunAbortedError` (and its subclasses) end a single statement run.
  :class:`~acct_parser.rewriter.StatementRewriter` catches them at the top of
  ``process()``; once the rewrite stage has begun the run statistics are
  still reported.

Per-line parse outcomes are not exceptions at all: the line parser returns
``None`` for anything that is not a transaction row.
"""

from __future__ import annotations


class AcctParserError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(AcctParserError):
    """Settings from the environment or ``.env`` are invalid."""


class CatalogLoadError(AcctParserError):
    """The account catalog could not be located, read, or parsed."""


class RunAbortedError(AcctParserError):
    """A statement run cannot continue."""


class BackupError(RunAbortedError):
    """The original statement could not be moved to its backup path."""


class RewriteError(RunAbortedError):
    """A stream-level failure while reading the backup or writing the output."""


__all__ = [
    "AcctParserError",
    "BackupError",
    "CatalogLoadError",
    "ConfigError",
    "RewriteError",
    "RunAbortedError",
]
