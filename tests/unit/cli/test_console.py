"""Tests for console module."""

from pathlib import Path
from unittest.mock import patch

from rich.console import Console

from mst.console import (
    console,
    custom_theme,
    print_heading,
    print_path,
    print_scenarios,
)


class TestConsole:
    def test_console_is_console_instance(self) -> None:
        assert isinstance(console, Console)

    def test_theme_defines_styles_used_by_renderers(self) -> None:
        for style in ("state", "error", "warning", "muted", "path"):
            assert style in custom_theme.styles

    def test_print_heading(self) -> None:
        with patch("mst.console.console") as mock_console:
            print_heading("Running customerSupport state machine")

        mock_console.print.assert_called_once_with(
            "\nRunning customerSupport state machine", style="heading"
        )

    def test_print_path(self) -> None:
        with patch("mst.console.console") as mock_console:
            print_path("Debug log", Path("/tmp/run.log"))

        mock_console.print.assert_called_once_with(
            "[muted]Debug log:[/muted] [path]/tmp/run.log[/path]"
        )

    def test_print_scenarios(self) -> None:
        with patch("mst.console.console") as mock_console:
            print_scenarios(["customerSupport", "problemSolving"])

        assert mock_console.print.call_count == 2
        mock_console.print.assert_any_call("  [state]problemSolving[/state]")
