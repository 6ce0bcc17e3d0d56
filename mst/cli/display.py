"""Rich rendering for run progress and results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from mst.console import console

if TYPE_CHECKING:
    from mst.runner import RunResult


def print_transition(from_state: str, to_state: str) -> None:
    """Transition listener printing each move."""
    console.print(f"  [muted]{from_state}[/muted] → [state]{to_state}[/state]")


def render_result(kind: str, result: RunResult) -> Panel:
    """Summary panel for a finished run."""
    if result.goal_reached:
        lines = [f"[success]Status:[/success] {result.status}"]
        title, border = f"[success]{kind}[/success]", "green"
    else:
        lines = [
            f"[error]Status:[/error] {result.status}",
            f"[muted]Reason:[/muted] {result.reason}",
        ]
        if result.error:
            lines.append(f"[muted]Error:[/muted] {result.error}")
        title, border = f"[error]{kind}[/error]", "red"

    lines.append(f"[muted]Final state:[/muted] [state]{result.final_state}[/state]")
    lines.append(f"[muted]Iterations:[/muted] {result.iterations}")
    lines.append(f"[muted]Trace:[/muted] {' → '.join(result.trace)}")
    lines.append(f"[muted]Visited:[/muted] {', '.join(result.visited_states)}")
    if result.fallback_events:
        lines.append(f"[warning]Fallbacks:[/warning] {len(result.fallback_events)}")

    return Panel("\n".join(lines), title=title, border_style=border)


def render_failures(result: RunResult) -> Table | None:
    """Table of instruction failures, or None if there were none."""
    if not result.instruction_failures:
        return None

    table = Table(title="Instruction failures", title_style="warning")
    table.add_column("State", style="state")
    table.add_column("Instruction")
    table.add_column("Error", style="error")
    for failure in result.instruction_failures:
        table.add_row(
            failure.state,
            failure.description,
            f"{failure.error_type}: {failure.message}",
        )
    return table
