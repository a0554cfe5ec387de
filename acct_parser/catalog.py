"""Account catalog: which transactions are "of interest" and what to call them.

The catalog is a flat ``account.properties`` file, one entry per line::

    # symbolic-name = description substring
    Checking=DEBIT CARD
    Savings: XFER

Rules
-----
- The name ends at the first ``=``, ``:`` or whitespace. Whitespace around
  the separator is skipped, along with one ``=`` or ``:`` that follows
  whitespace, so ``Checking DEBIT CARD`` and ``Checking = DEBIT CARD`` are the
  same entry. Names therefore cannot contain spaces; substrings can.
- Blank lines and lines starting with ``#`` or ``!`` are ignored.
- Entries keep their file order. Matching is a first-match-wins scan in that
  order, so when a description contains the substrings of two entries, the one
  declared first wins. A name may appear more than once; each occurrence is an
  independent entry for the same account.
- Matching is case-sensitive plain substring containment.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import CatalogLoadError
from .logging_setup import get_logger
from .settings import Settings

logger = get_logger("acct_parser.catalog")

CATALOG_FILE_NAME = "account.properties"
USER_CONFIG_DIR = Path("~/.config/acct-parser")

_COMMENT_PREFIXES = ("#", "!")
_SEPARATOR_RE = re.compile(r"[=:\s]")


class CatalogEntry(BaseModel):
    """One (symbolic account name, description substring) pair."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str
    substring: str

    @field_validator("name", "substring")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be non-empty")
        return v


def _split_entry(line: str) -> tuple[str, str] | None:
    match = _SEPARATOR_RE.search(line)
    if match is None:
        return None
    name, rest = line[: match.start()], line[match.end() :]
    # "name = value": whitespace may surround a single '=' or ':'.
    if match.group().isspace():
        rest = rest.lstrip()
        if rest[:1] in ("=", ":"):
            rest = rest[1:]
    return name, rest


def parse_properties(lines: Iterable[str], *, source: str = "<catalog>") -> list[CatalogEntry]:
    """Parse catalog lines into entries, preserving declaration order.

    Raises :class:`CatalogLoadError` naming ``source`` and the 1-based line
    number for lines that are neither blank, comments, nor valid entries.
    """

    entries: list[CatalogEntry] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        pair = _split_entry(line)
        if pair is None:
            raise CatalogLoadError(f"{source}:{lineno}: expected 'name=substring', got {line!r}")
        name, substring = pair
        try:
            entries.append(CatalogEntry(name=name, substring=substring))
        except ValidationError as exc:
            raise CatalogLoadError(
                f"{source}:{lineno}: name and substring must both be non-empty in {line!r}"
            ) from exc
    return entries


def resolve_catalog_path(
    path: str | os.PathLike[str] | None = None, *, settings: Settings | None = None
) -> Path:
    """Return the catalog file to read.

    An explicit ``path`` wins, then ``settings.accounts_path``; otherwise the
    first existing file among ``./account.properties`` and
    ``~/.config/acct-parser/account.properties``.
    """

    if path is not None:
        return Path(path)
    if settings is not None and settings.accounts_path is not None:
        return settings.accounts_path

    candidates = [
        Path.cwd() / CATALOG_FILE_NAME,
        USER_CONFIG_DIR.expanduser() / CATALOG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise CatalogLoadError(
        f"Unable to locate {CATALOG_FILE_NAME}; looked in: "
        + ", ".join(str(c) for c in candidates)
    )


@dataclass(frozen=True, slots=True)
class AccountCatalog:
    """Immutable, ordered set of accounts of interest."""

    entries: tuple[CatalogEntry, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, source: str = "<catalog>") -> AccountCatalog:
        return cls(tuple(parse_properties(lines, source=source)))

    @classmethod
    def load(
        cls,
        path: str | os.PathLike[str] | None = None,
        *,
        settings: Settings | None = None,
    ) -> AccountCatalog:
        """Read the catalog file once; see :func:`resolve_catalog_path`.

        Raises :class:`CatalogLoadError` when the file cannot be found, read,
        or parsed.
        """

        catalog_path = resolve_catalog_path(path, settings=settings)
        try:
            text = catalog_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.critical("Unable to read account catalog %s", catalog_path, exc_info=True)
            raise CatalogLoadError(f"Unable to read account catalog {catalog_path}: {exc}") from exc

        catalog = cls.from_lines(text.splitlines(), source=str(catalog_path))
        logger.debug("Read %d account(s) from %s:", len(catalog), catalog_path)
        for entry in catalog:
            logger.debug("  %s = %s", entry.name, entry.substring)
        if not catalog:
            logger.warning("Account catalog %s defines no accounts", catalog_path)
        return catalog

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def names(self) -> list[str]:
        """Distinct account names in first-declared order."""
        return list(dict.fromkeys(e.name for e in self.entries))

    def matching_account(self, description: str) -> str | None:
        """Return the account name for ``description`` or ``None``."""

        for entry in self.entries:
            if entry.substring in description:
                logger.debug("found match with account %s for %r", entry.name, description)
                return entry.name
        return None

    def is_recognized(self, description: str) -> bool:
        return self.matching_account(description) is not None


__all__ = [
    "AccountCatalog",
    "CatalogEntry",
    "CATALOG_FILE_NAME",
    "parse_properties",
    "resolve_catalog_path",
]
