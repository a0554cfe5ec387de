"""Public interface for the ``acct_parser`` package.

Rewrites bank CSV statements into ``year,month,day,amount,account`` rows for a
configured set of accounts of interest. This module only re-exports symbols;
the command-line entry point lives in :mod:`acct_parser.cli`.
"""

from .catalog import AccountCatalog, CatalogEntry
from .errors import (
    AcctParserError,
    BackupError,
    CatalogLoadError,
    ConfigError,
    RewriteError,
    RunAbortedError,
)
from .record import BANK_EXPORT_LAYOUT, ColumnLayout, TransactionRecord, parse_line
from .reporter import Reporter
from .rewriter import RunStats, StatementRewriter, backup_path_for, rewrite_statement
from .settings import Settings

__version__ = "0.1.0"

__all__ = [
    # Core
    "AccountCatalog",
    "CatalogEntry",
    "TransactionRecord",
    "ColumnLayout",
    "BANK_EXPORT_LAYOUT",
    "parse_line",
    "StatementRewriter",
    "RunStats",
    "backup_path_for",
    "rewrite_statement",
    # Ambient
    "Reporter",
    "Settings",
    # Errors
    "AcctParserError",
    "BackupError",
    "CatalogLoadError",
    "ConfigError",
    "RewriteError",
    "RunAbortedError",
]
