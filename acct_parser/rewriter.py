"""Back up a bank statement and rewrite it in place as normalized CSV.

Lifecycle of one run (:meth:`StatementRewriter.process`)
--------------------------------------------------------
1. Backup: any existing ``<stem>.bak`` is deleted, then the statement is
   renamed to it. If that fails the run ends immediately; the statement is
   left where it was.
2. Rewrite: the backup is streamed line by line as bytes. Each line is
   decoded with the configured encoding and parsed with
   :func:`acct_parser.record.parse_line` and matched with
   :meth:`acct_parser.catalog.AccountCatalog.matching_account`. Matching lines
   are written to the original path as ``year,month,day,amount,account``
   (no header). Non-transaction and unmatched lines are dropped silently.
   An exception while handling one line, including a decode error, is
   reported and the next line is processed.
3. Finalize: both files are closed on every path and the line counters are
   reported, even after a stream-level failure.
"""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, TextIO

from .catalog import AccountCatalog
from .errors import BackupError, RewriteError, RunAbortedError
from .logging_setup import get_logger
from .record import parse_line
from .reporter import Reporter
from .settings import DEFAULT_BACKUP_EXTENSION, Settings

logger = get_logger("acct_parser.rewriter")


@dataclass(slots=True)
class RunStats:
    input_lines: int = 0
    output_lines: int = 0
    line_errors: int = 0


def backup_path_for(
    path: str | os.PathLike[str], extension: str = DEFAULT_BACKUP_EXTENSION
) -> Path:
    """Return the backup path for ``path`` in the same directory.

    - ``stmt.csv`` → ``stmt.bak`` (the part after the last dot is replaced)
    - ``stmt`` → ``stmt.bak``
    - ``.stmt`` → ``.stmt.bak`` (a leading dot is not an extension)
    """

    p = Path(path)
    name = p.name
    inx = name.rfind(".")
    if inx > 0:
        name = name[:inx]
    return p.with_name(name + extension)


class StatementRewriter:
    """Filter and normalize one statement file; see the module docstring."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        catalog: AccountCatalog,
        *,
        reporter: Reporter | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.path = Path(path).absolute()
        self.catalog = catalog
        self.reporter = reporter or Reporter()
        self.settings = settings or Settings()
        self.backup_path = backup_path_for(self.path, self.settings.backup_extension)
        self.stats = RunStats()

    def process(self) -> RunStats | None:
        """Run backup, rewrite and reporting.

        Returns the run statistics, or ``None`` when the backup step failed
        and nothing was read.
        """

        file_name = str(self.path)
        logger.info("processing file: %s", file_name)
        logger.info("backing up as: %s", self.backup_path)
        try:
            self._backup()
        except BackupError as e:
            self.reporter.error(str(e))
            logger.error("%s", e, exc_info=e.__cause__ is not None)
            return None

        self.reporter.message(f"Correcting {file_name}")
        try:
            self._rewrite()
        except RunAbortedError as e:
            self.reporter.error(f"Error while processing file {file_name}: {e}")
            logger.error("run aborted for %s: %s", file_name, e, exc_info=True)

        self._report_statistics()
        return self.stats

    # ---- Stages ---------------------------------------------------------

    def _backup(self) -> None:
        if self.backup_path == self.path:
            raise BackupError(
                f"Unable to back up {self.path}: it already has the backup extension "
                f"{self.settings.backup_extension!r}"
            )
        try:
            if self.backup_path.exists():
                logger.debug("removing stale backup %s", self.backup_path)
                self.backup_path.unlink()
            self.path.rename(self.backup_path)
        except OSError as exc:
            raise BackupError(
                f"Unable to rename file {self.path} to {self.backup_path}: {exc}"
            ) from exc

    def _rewrite(self) -> None:
        try:
            with (
                open(self.backup_path, "rb") as src,
                open(self.path, "w", encoding="utf-8", newline="") as out,
            ):
                self._copy_lines(src, out)
        except OSError as exc:
            raise RewriteError(str(exc)) from exc

    def _copy_lines(self, src: BinaryIO, out: TextIO) -> None:
        writer = csv.writer(out, lineterminator="\n")
        encoding = self.settings.encoding
        for raw in src:
            self.stats.input_lines += 1
            lineno = self.stats.input_lines
            raw = raw.rstrip(b"\r\n")
            # Decoded per line; a bad byte fails only that line.
            shown = raw.decode(encoding, errors="replace")
            logger.debug("***Line #%d: %s", lineno, shown)
            try:
                row = self._convert_line(raw.decode(encoding))
                if row is None:
                    logger.debug("       <<ignored>>")
                    continue
                writer.writerow(row)
            except Exception:
                self.stats.line_errors += 1
                self.reporter.error(f"Error encountered processing line #{lineno}: {shown}")
                logger.exception("failed to process line #%d of %s", lineno, self.backup_path)
                continue
            self.stats.output_lines += 1
            logger.debug("       >>%s", ",".join(row))
            self.reporter.detail(f"Line #{lineno}: {','.join(row)}")

    def _convert_line(self, line: str) -> list[str] | None:
        record = parse_line(line)
        if record is None:
            return None
        account = self.catalog.matching_account(record.description)
        if account is None:
            return None
        return record.to_output_row(account)

    def _report_statistics(self) -> None:
        self.reporter.message(f"# Input Lines:  {self.stats.input_lines}")
        self.reporter.message(f"# Output Lines: {self.stats.output_lines}")
        if self.stats.line_errors:
            self.reporter.message(f"# Line Errors:  {self.stats.line_errors}")


def rewrite_statement(
    path: str | os.PathLike[str],
    catalog: AccountCatalog,
    *,
    reporter: Reporter | None = None,
    settings: Settings | None = None,
) -> RunStats | None:
    """Convenience wrapper: ``StatementRewriter(...).process()``."""

    return StatementRewriter(path, catalog, reporter=reporter, settings=settings).process()


__all__ = ["RunStats", "StatementRewriter", "backup_path_for", "rewrite_statement"]
