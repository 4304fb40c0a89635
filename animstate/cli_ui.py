"""Shared CLI UI primitives for animstate.

Wraps Rich to provide a consistent visual identity.
All CLI code should import from here, never from rich directly.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from animstate.graph.model import State, Transition

# ---------------------------------------------------------------------------
# Theme & singletons
# ---------------------------------------------------------------------------

THEME = Theme(
    {
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "state": "bold",
        "trigger": "cyan",
    }
)

console = Console(theme=THEME, highlight=False)

# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

_MAX_WIDTH = 80


def _panel_width() -> int:
    return min(console.width, _MAX_WIDTH)


def success(msg: str) -> None:
    """Green checkmark + message."""
    console.print(f"  [success]✓[/] {msg}")


def error(msg: str, hint: Optional[str] = None) -> None:
    """Red X + message, optional dim hint."""
    console.print(f"  [error]✗[/] {msg}", style="error")
    if hint:
        console.print(f"    [dim]{hint}[/]")


def warning(msg: str) -> None:
    """Yellow warning prefix + message."""
    console.print(f"  [warning]![/] {msg}")


def dim(msg: str) -> None:
    """Print dim secondary text."""
    console.print(f"  [dim]{msg}[/]")


def key_value(key: str, value: str, indent: int = 2) -> None:
    """Print 'key: value' with bold key."""
    pad = " " * indent
    console.print(f"{pad}[bold]{key}:[/] {value}")


def config_panel(title: str, items: dict[str, str]) -> None:
    """Panel showing a key-value summary."""
    body = "\n".join(f"[bold]{k}:[/] {v}" for k, v in items.items())

    console.print()
    console.print(
        Panel(
            body,
            title=title,
            title_align="left",
            border_style="dim",
            width=_panel_width(),
            padding=(0, 1),
        )
    )


def make_table(title: str, columns: list[str], rows: list[list[str]]) -> None:
    """Build and print a Rich table."""
    table = Table(
        title=title,
        title_style="bold",
        show_header=True,
        header_style="bold dim",
        border_style="dim",
        width=_panel_width(),
        show_lines=False,
        padding=(0, 1),
    )
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    console.print()
    console.print(table)


# ---------------------------------------------------------------------------
# State graph views
# ---------------------------------------------------------------------------


def state_table(states: Iterable[State]) -> None:
    """Table of states with their clip and playback speed."""
    rows = [
        [f"[state]{s.name}[/]", s.animation_clip or "-", f"{s.speed:g}"] for s in states
    ]
    make_table("States", ["Name", "Clip", "Speed"], rows)


def transition_table(
    transitions: Iterable[Transition],
    title: str = "Transitions",
    verbose: bool = False,
    numbered: bool = False,
) -> None:
    """
    Table of transitions, one row per edge.

    Args:
        transitions: Edges to show, in order
        title: Table title
        verbose: Add offset, duration and exit time columns
        numbered: Prefix each row with its 1-based position
    """
    columns = ["From", "Trigger", "To"]
    if verbose:
        columns += ["Offset", "Duration", "Exit time"]
    if numbered:
        columns = ["#"] + columns

    rows = []
    for i, t in enumerate(transitions, start=1):
        row = [t.from_state, f"[trigger]{t.trigger}[/]", f"→ [state]{t.to_state}[/]"]
        if verbose:
            exit_time = f"{t.exit_time:g}" if t.has_exit_time else "-"
            row += [f"{t.offset:g}", f"{t.duration:g}", exit_time]
        if numbered:
            row = [str(i)] + row
        rows.append(row)

    make_table(title, columns, rows)
