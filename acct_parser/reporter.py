"""Console sink for user-facing messages."""

from __future__ import annotations

import typer


class Reporter:
    """Print progress to stdout and errors to stderr, honoring quiet/verbose.

    Quiet mode suppresses everything, errors included, except messages sent
    with ``force=True`` (command-line validation problems). Verbose mode is
    ignored when quiet mode is also requested.
    """

    def __init__(self, *, verbose: bool = False, quiet: bool = False) -> None:
        self.quiet = quiet
        self.verbose = verbose and not quiet

    def message(self, text: str) -> None:
        if not self.quiet:
            typer.echo(text)

    def detail(self, text: str) -> None:
        """Emit ``text`` only in verbose mode."""
        if self.verbose:
            typer.echo(text)

    def error(self, text: str, *, force: bool = False) -> None:
        if force or not self.quiet:
            typer.echo(text, err=True)


__all__ = ["Reporter"]
