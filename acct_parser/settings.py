"""Runtime settings sourced from the environment (and a local ``.env``).

Recognized variables
--------------------
- ``ACCT_PARSER_ACCOUNTS``: path to the account catalog file. When unset the
  catalog loader falls back to ``./account.properties`` and then
  ``~/.config/acct-parser/account.properties``.
- ``ACCT_PARSER_ENCODING``: text encoding of the bank export (``utf-8``).
- ``ACCT_PARSER_BACKUP_EXT``: extension for the backup copy (``.bak``).
- ``ACCT_PARSER_LOG_LEVEL``: read by :mod:`acct_parser.logging_setup`.
"""

from __future__ import annotations

import codecs
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError

ACCOUNTS_ENV = "ACCT_PARSER_ACCOUNTS"
ENCODING_ENV = "ACCT_PARSER_ENCODING"
BACKUP_EXT_ENV = "ACCT_PARSER_BACKUP_EXT"

DEFAULT_BACKUP_EXTENSION = ".bak"


class Settings(BaseModel):
    """Validated, immutable settings for one process."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    accounts_path: Path | None = None
    encoding: str = "utf-8"
    backup_extension: str = DEFAULT_BACKUP_EXTENSION

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
            newline = "\n".encode(v)
        except LookupError as exc:
            raise ValueError(f"unknown text encoding: {v!r}") from exc
        if newline != b"\n":
            raise ValueError(f"encoding must store newlines as a single byte: {v!r}")
        return v

    @field_validator("backup_extension")
    @classmethod
    def _dotted_extension(cls, v: str) -> str:
        if len(v) < 2 or not v.startswith("."):
            raise ValueError("backup extension must start with '.' and name a suffix")
        if "/" in v or "\\" in v or v.count(".") != 1:
            raise ValueError(f"backup extension must be a single suffix: {v!r}")
        return v

    @classmethod
    def from_env(cls, *, dotenv_path: str | os.PathLike[str] | None = None) -> Settings:
        """Build settings from ``os.environ`` after loading ``.env``.

        The ``.env`` file (``./.env`` unless ``dotenv_path`` is given) never
        overrides variables that are already set. Raises :class:`ConfigError`
        when a value fails validation.
        """

        load_dotenv(dotenv_path=dotenv_path or Path.cwd() / ".env", override=False)

        values: dict[str, str] = {}
        accounts = os.getenv(ACCOUNTS_ENV)
        if accounts and accounts.strip():
            values["accounts_path"] = accounts
        encoding = os.getenv(ENCODING_ENV)
        if encoding and encoding.strip():
            values["encoding"] = encoding
        backup_ext = os.getenv(BACKUP_EXT_ENV)
        if backup_ext and backup_ext.strip():
            values["backup_extension"] = backup_ext

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(f"invalid settings: {exc}") from exc


__all__ = ["Settings", "DEFAULT_BACKUP_EXTENSION"]
