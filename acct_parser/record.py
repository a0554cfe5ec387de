"""Parse one raw line of the bank CSV export into a transaction record.

Bank export layout (fixed by the bank, matched exactly)::

    2015-03-01,DEBIT CARD PURCHASE,-42.50
    <posting date>,<description>,<amount>[,<ignored trailing columns>...]

- date: ``YYYY-MM-DD``; must be a real calendar date.
- description: free text, non-empty; may be quoted to contain commas.
- amount: plain decimal literal with optional sign (``-42.50``, ``+5``,
  ``.75``). Kept exactly as written; no rounding, currency symbols, or
  thousands separators.

:func:`parse_line` is total: any line that does not fit the layout (headers,
blank lines, rows already rewritten to ``year,month,day,...``) yields ``None``.
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass
from datetime import date

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})")
_AMOUNT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


@dataclass(frozen=True, slots=True)
class ColumnLayout:
    """Zero-based column positions of the fields we read."""

    date: int
    description: int
    amount: int

    @property
    def min_columns(self) -> int:
        return max(self.date, self.description, self.amount) + 1


BANK_EXPORT_LAYOUT = ColumnLayout(date=0, description=1, amount=2)


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """A fully parsed statement line.

    ``year``/``month``/``day`` are the integers as written (``"03"`` → ``3``);
    ``amount`` and ``description`` are the source text, trimmed.
    """

    year: int
    month: int
    day: int
    amount: str
    description: str

    @classmethod
    def parse(
        cls, line: str, layout: ColumnLayout = BANK_EXPORT_LAYOUT
    ) -> TransactionRecord | None:
        return parse_line(line, layout)

    def to_output_row(self, account: str) -> list[str]:
        """Fields of the normalized output line: year, month, day, amount, account."""
        return [str(self.year), str(self.month), str(self.day), self.amount, account]


def _split_columns(line: str) -> list[str] | None:
    try:
        return next(csv.reader([line]), None)
    except csv.Error:
        return None


def _parse_date(text: str) -> tuple[int, int, int] | None:
    m = _DATE_RE.fullmatch(text)
    if m is None:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        date(year, month, day)
    except ValueError:
        return None
    return year, month, day


def parse_line(line: str, layout: ColumnLayout = BANK_EXPORT_LAYOUT) -> TransactionRecord | None:
    """Return a :class:`TransactionRecord` for ``line`` or ``None``.

    Never raises for malformed content.
    """

    columns = _split_columns(line.rstrip("\r\n"))
    if columns is None or len(columns) < layout.min_columns:
        return None

    parts = _parse_date(columns[layout.date].strip())
    if parts is None:
        return None

    amount = columns[layout.amount].strip()
    if not _AMOUNT_RE.fullmatch(amount):
        return None

    description = columns[layout.description].strip()
    if not description:
        return None

    year, month, day = parts
    return TransactionRecord(
        year=year, month=month, day=day, amount=amount, description=description
    )


__all__ = ["BANK_EXPORT_LAYOUT", "ColumnLayout", "TransactionRecord", "parse_line"]
