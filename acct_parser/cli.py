"""Command-line driver for ``acct-parser``.

Usage::

    acct-parser [-qv] FILE...

Each FILE is a bank CSV export. It is backed up as ``<name>.bak`` and then
rewritten in place so that it contains only transactions for the accounts
listed in ``account.properties``, one per line as
``year,month,day,amount,account``.

Every FILE must exist, be a regular file, and be writable; otherwise nothing
is processed. Validation errors are printed even in quiet mode. ``.env`` in
the current directory is loaded before settings are read.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from .catalog import AccountCatalog
from .errors import CatalogLoadError, ConfigError
from .logging_setup import configure_logging, get_logger
from .reporter import Reporter
from .rewriter import StatementRewriter, backup_path_for
from .settings import DEFAULT_BACKUP_EXTENSION, Settings

logger = get_logger("acct_parser.cli")

app = typer.Typer(
    add_completion=False,
    help=(
        "Back up bank CSV statements and rewrite them to year,month,day,amount,account "
        "rows for the accounts listed in account.properties."
    ),
)


def _is_writable(path: Path) -> bool:
    return os.access(path, os.W_OK)


def validate_files(
    paths: list[Path],
    reporter: Reporter,
    *,
    backup_extension: str = DEFAULT_BACKUP_EXTENSION,
) -> list[Path] | None:
    """Check every path; report each problem and return ``None`` if any failed.

    Besides existence and permissions, no two arguments may name the same file
    or back up to the same path, and no argument may be another's backup path:
    a second run over either would replace the backup holding the original.
    """

    valid: list[Path] = []
    ok = True
    # resolved file -> argument, resolved backup -> argument
    files: dict[Path, Path] = {}
    backups: dict[Path, Path] = {}
    for arg in paths:
        path = arg.absolute()
        if not path.exists():
            reporter.error(f"no such file: {path}", force=True)
            ok = False
            continue
        if not path.is_file():
            reporter.error(f"cannot convert a directory: {path}", force=True)
            ok = False
            continue
        if not _is_writable(path):
            reporter.error(f"file is not writeable: {path}", force=True)
            ok = False
            continue

        real = path.resolve()
        backup = backup_path_for(real, backup_extension)
        if real in files:
            reporter.error(f"file given more than once: {path}", force=True)
            ok = False
            continue
        if real in backups:
            reporter.error(f"backing up {backups[real]} would overwrite {path}", force=True)
            ok = False
        elif backup != real and backup in files:
            reporter.error(f"backing up {path} would overwrite {files[backup]}", force=True)
            ok = False
        elif backup in backups:
            reporter.error(
                f"{path} and {backups[backup]} would both be backed up as {backup}", force=True
            )
            ok = False
        files[real] = path
        backups.setdefault(backup, path)
        valid.append(path)
    return valid if ok else None


@app.command()
def main(
    ctx: typer.Context,
    files: Annotated[
        list[Path],
        typer.Argument(help="CSV file(s) containing account transactions", show_default=False),
    ],
    verbose: Annotated[
        bool,
        typer.Option("-v", "-V", "--verbose", help="Output additional info while processing."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "-q",
            "-Q",
            "--quiet",
            help="Suppress all output except command-line errors. Overrides -v.",
        ),
    ] = False,
    accounts: Annotated[
        Path | None,
        typer.Option(
            "--accounts",
            help="Account catalog file (default: $ACCT_PARSER_ACCOUNTS or ./account.properties).",
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level (default: $ACCT_PARSER_LOG_LEVEL or WARNING).",
        ),
    ] = None,
) -> None:
    """Filter and normalize bank CSV statements in place."""

    reporter = Reporter(verbose=verbose, quiet=quiet)

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        reporter.error(f"Error: {e}", force=True)
        raise typer.Exit(1) from e

    try:
        configure_logging(log_level)
    except ValueError as e:
        reporter.error(f"Error: {e}", force=True)
        raise typer.Exit(1) from e

    logger.debug("options: verbose=%s quiet=%s files=%s", verbose, quiet, files)

    valid = validate_files(files, reporter, backup_extension=settings.backup_extension)
    if valid is None:
        typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(1)

    try:
        catalog = AccountCatalog.load(accounts, settings=settings)
    except CatalogLoadError as e:
        reporter.error(f"Error: {e}", force=True)
        raise typer.Exit(1) from e

    for path in valid:
        StatementRewriter(path, catalog, reporter=reporter, settings=settings).process()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
