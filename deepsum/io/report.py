"""
Result rendering.

Plain scans print manifest lines; audits print one tagged line per outcome.
Lines are written verbatim so scan output reads back as a manifest; only
the outcome tag is coloured, by default only on terminals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TextIO

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from deepsum.audit.manifest import format_manifest_line
from deepsum.audit.reconcile import Outcome, OutcomeKind
from deepsum.scan.walker import TraversedFile

TAG_STYLES: dict[OutcomeKind, str] = {
    OutcomeKind.OK: "green",
    OutcomeKind.CHANGED_SIZE: "red",
    OutcomeKind.MOVED: "blue",
    OutcomeKind.CHANGED: "red",
    OutcomeKind.NEW: "yellow",
    OutcomeKind.MISSING: "magenta",
    OutcomeKind.DUPLICATE: "blue",
}


def render_outcome(outcome: Outcome, styled: bool = True) -> str:
    """
    Render an outcome as one audit line.

    Args:
        outcome: Outcome to render.
        styled: Wrap the tag in ANSI colour codes.

    Example:
        >>> render_outcome(Outcome.moved("ab12", "b.txt", "a.txt"), styled=False)
        'ab12  b.txt  (MOVED from a.txt)'
    """
    kind = outcome.kind
    tag = click.style(kind.value, fg=TAG_STYLES[kind]) if styled else kind.value

    if kind == OutcomeKind.OK:
        return f"{outcome.digest} -> {outcome.path}  ({tag})"
    if kind == OutcomeKind.CHANGED_SIZE:
        return (
            f"{outcome.digest} -> {outcome.path}  "
            f"({tag} from {outcome.old_size} to {outcome.new_size})"
        )

    if kind == OutcomeKind.MOVED:
        detail = f" from {outcome.old_path})"
    elif kind == OutcomeKind.CHANGED:
        detail = f" hash from {outcome.old_digest})"
    elif kind == OutcomeKind.NEW:
        detail = f" in filesystem with size {outcome.new_size})"
    elif kind == OutcomeKind.MISSING:
        if outcome.old_size is None:
            detail = " in filesystem)"
        else:
            detail = f" in filesystem with expected size {outcome.old_size})"
    else:
        detail = f" hash with {outcome.old_path})"

    return f"{outcome.digest}  {outcome.path}  ({tag}{detail}"


def format_outcome(outcome: Outcome) -> str:
    """Render an outcome without styling."""
    return render_outcome(outcome, styled=False)


@dataclass
class RunSummary:
    """Counts of what a run reported."""

    files: int = 0
    counts: dict[OutcomeKind, int] = field(default_factory=dict)

    def record(self, outcome: Outcome) -> None:
        self.counts[outcome.kind] = self.counts.get(outcome.kind, 0) + 1

    def count(self, kind: OutcomeKind) -> int:
        return self.counts.get(kind, 0)

    @property
    def clean(self) -> bool:
        """True when every audited file was OK and nothing is missing."""
        return all(kind == OutcomeKind.OK for kind, n in self.counts.items() if n)


class Reporter:
    """
    Writes scan and audit lines to a text stream.

    Lines go out through click.echo unchanged, so tabs and other unusual
    characters in paths survive.
    """

    def __init__(self, stream: TextIO | None = None, color: bool | None = None):
        """
        Initialize reporter.

        Args:
            stream: Destination (defaults to the current stdout).
            color: True always colours tags, False never does, None colours
                only when the stream is a terminal.
        """
        self.stream = stream
        self.color = color

    def _styled(self) -> bool:
        if self.color is not None:
            return self.color
        stream = self.stream or click.get_text_stream("stdout")
        return stream.isatty()

    def message(self, text: str) -> None:
        """Print an informational line."""
        # color=True keeps click from stripping escapes that belong to a path
        click.echo(text, file=self.stream, color=True)

    def file(self, file: TraversedFile, compat_output: bool = False) -> None:
        """Print a plain-scan line."""
        self.message(format_manifest_line(file, compat_output))

    def outcome(self, outcome: Outcome) -> None:
        """Print an audit line."""
        click.echo(render_outcome(outcome, styled=self._styled()), file=self.stream, color=True)

    def summary(self, summary: RunSummary, console: Console | None = None) -> None:
        """
        Print outcome counts as a table.

        Args:
            summary: Run summary.
            console: Destination (defaults to stderr).
        """
        console = console or Console(stderr=True, highlight=False)

        table = Table(title="Scan Summary")
        table.add_column("Outcome")
        table.add_column("Count", justify="right")

        table.add_row("Files", str(summary.files))
        for kind in OutcomeKind:
            n = summary.count(kind)
            if n:
                table.add_row(Text(kind.value, style=TAG_STYLES[kind]), str(n))

        console.print(table)
