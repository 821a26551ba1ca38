"""Outcome and verdict printers (plain text and Rich)."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hookgate.types.hooks import HookOutcome, RunState, Verdict

STYLE_ALLOW = "bold #34d399"       # green
STYLE_BLOCK = "bold #f87171"       # red
STYLE_FAIL = "bold #fbbf24"        # amber
STYLE_DETAIL = "#7c7c8a"           # muted grey
STYLE_LABEL = "bold #94a3b8"       # slate

_PREVIEW = 200


def _status(outcome: HookOutcome) -> str:
    if outcome.blocks:
        return "BLOCK"
    if outcome.state is not RunState.COMPLETED or outcome.exit_code != 0:
        return "FAIL"
    return "ALLOW"


def _preview(text: str) -> str:
    text = text.strip()
    return text if len(text) <= _PREVIEW else text[:_PREVIEW] + "..."


def print_outcomes(outcomes: list[HookOutcome], verdict: Verdict) -> None:
    """Print outcomes and the verdict in basic text mode."""
    if not outcomes:
        print("No hooks matched.", file=sys.stderr)
    for o in outcomes:
        print(
            f"[{_status(o)}] exit={o.exit_code} {o.duration_ms}ms  {o.command}",
            file=sys.stderr,
        )
        if o.stderr.strip():
            print(f"  stderr: {_preview(o.stderr)}", file=sys.stderr)
        if o.stdout.strip():
            print(f"  stdout: {_preview(o.stdout)}", file=sys.stderr)
    if verdict.blocked:
        print(f"Blocked: {verdict.message}")
    else:
        print("Allowed")


class RichOutcomePrinter:
    """Rich-based printer for dispatch results."""

    _STATUS_STYLES = {"ALLOW": STYLE_ALLOW, "BLOCK": STYLE_BLOCK, "FAIL": STYLE_FAIL}

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def print_outcomes(self, outcomes: list[HookOutcome], verdict: Verdict) -> None:
        if outcomes:
            self._console.print(self._table(outcomes))
        else:
            self._console.print(Text("No hooks matched.", style=STYLE_DETAIL))

        if verdict.blocked:
            self._console.print(Panel(
                Text(verdict.message, style=STYLE_BLOCK),
                title="Blocked",
                border_style="#f87171",
                expand=False,
            ))
        else:
            self._console.print(Text("Allowed", style=STYLE_ALLOW))

    def _table(self, outcomes: list[HookOutcome]) -> Table:
        tbl = Table(show_edge=False, padding=(0, 1), expand=False)
        tbl.add_column("Status", no_wrap=True)
        tbl.add_column("Exit", justify="right", style=STYLE_LABEL)
        tbl.add_column("Time", justify="right", style=STYLE_DETAIL)
        tbl.add_column("Command", style=STYLE_DETAIL)
        tbl.add_column("Output")
        for o in outcomes:
            status = _status(o)
            tbl.add_row(
                Text(status, style=self._STATUS_STYLES[status]),
                str(o.exit_code),
                f"{o.duration_ms}ms",
                o.command,
                _preview(o.stderr or o.stdout),
            )
        return tbl
