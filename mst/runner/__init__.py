"""Execution loop."""

from mst.runner.loop import FallbackEvent, RunResult, run_machine

__all__ = ["FallbackEvent", "RunResult", "run_machine"]
