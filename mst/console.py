"""Shared Rich console with the theme used for run output."""

from rich.console import Console
from rich.theme import Theme

# Named styles; "state" marks state labels everywhere
custom_theme = Theme({
    "heading": "bold cyan",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
    "muted": "dim",
    "path": "cyan",
    "state": "bold magenta",
})

console = Console(theme=custom_theme)


def print_heading(text: str) -> None:
    console.print(f"\n{text}", style="heading")


def print_path(label: str, path: object) -> None:
    """Print a labeled filesystem path, e.g. the run's log file."""
    console.print(f"[muted]{label}:[/muted] [path]{path}[/path]")


def print_scenarios(names: list[str]) -> None:
    """List scenario names, one per line."""
    for name in names:
        console.print(f"  [state]{name}[/state]")
