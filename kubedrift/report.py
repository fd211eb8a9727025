"""Terminal output for drift reports.

An :class:`OutputFormatter` is created once by the CLI and passed down to the
orchestration loop; nothing here touches process-wide state.
"""

from __future__ import annotations

from typing import IO

import click

from kubedrift.models.results import DiffResult


class OutputFormatter:
    """Writes per-target blocks to *out* and notices/skips to *err*.

    Args:
        color: Emit ANSI styling.  When False, styles are stripped.
        out:   Stream for results (defaults to stdout).
        err:   Stream for notices and skips (defaults to stderr).
    """

    def __init__(self, color: bool = True, out: IO[str] | None = None, err: IO[str] | None = None) -> None:
        self._color = color
        self._out = out
        self._err = err

    def header(self, label: str) -> None:
        self._echo(click.style(label, bold=True))

    def notice(self, text: str) -> None:
        self._echo(click.style(text, fg="yellow"), err=True)

    def skipped(self, error: BaseException | str) -> None:
        self._echo(click.style(f"skipped due to error: {error}", fg="yellow"), err=True)

    def result(self, result: DiffResult) -> None:
        if result.equal:
            self._echo(click.style("No diff.", fg="green") + "\n")
            return
        presences = format_presences(result)
        if presences:
            self._echo(click.style("\n".join(presences), fg="red") + "\n")
        if result.changed:
            self._echo(click.style("\n".join(result.changed), fg="red") + "\n")

    def _echo(self, message: str, err: bool = False) -> None:
        click.echo(message, file=self._err if err else self._out, err=err, color=self._color)


def format_presences(result: DiffResult) -> list[str]:
    """One line per missing or extra identity."""
    lines = [f"- {ident} is not found" for ident in result.missing]
    lines.extend(f"+ {ident} is found, but not in default" for ident in result.extra)
    return lines
