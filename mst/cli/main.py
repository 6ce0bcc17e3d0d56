"""CLI entry point for running scenario state machines."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mst.cli.display import print_transition, render_failures, render_result
from mst.config import get_oracle
from mst.console import console, print_heading, print_path, print_scenarios
from mst.core import ENGINE, Tier
from mst.core.env import TIER_ENV_VAR, default_tier, validate_required_env
from mst.runner import run_machine
from mst.scenarios import INITIAL_PROBLEM, SCENARIOS, create_state_machine
from mst.support import cleanup_old_logs, get_logs_dir
from mst.utils import setup_logging

if TYPE_CHECKING:
    from mst.runner import RunResult

logger = logging.getLogger(__name__)

DEFAULT_PROBLEM = "Design a caching layer for a slow product-catalog API."

try:
    VERSION = get_version("agent-mst")
except PackageNotFoundError:
    VERSION = "0.0.0"


def _create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mst",
        description="Run instruction-driven state machines guided by Claude.",
    )
    parser.add_argument(
        "kinds",
        nargs="*",
        default=["customerSupport"],
        metavar="KIND",
        help="Scenario(s) to run (default: customerSupport)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available scenarios and exit",
    )
    parser.add_argument(
        "--problem",
        default=DEFAULT_PROBLEM,
        help="Problem statement for the problemSolving scenario",
    )
    parser.add_argument(
        "--tier",
        choices=[t.value for t in Tier],
        default=None,
        help=f"Model tier (default: ${TIER_ENV_VAR} or med)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=ENGINE.max_iterations,
        help=f"Iteration cap per run (default: {ENGINE.max_iterations})",
    )
    parser.add_argument(
        "--step-delay",
        type=float,
        default=1.0,
        help="Seconds to pause between iterations (default: 1.0)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging to console",
    )
    return parser


# Load environment variables
load_dotenv()


async def run_scenarios(
    kinds: list[str],
    *,
    tier: Tier,
    problem: str,
    max_iterations: int,
    step_delay: float,
) -> list[tuple[str, RunResult]]:
    """Run each scenario in turn, stopping early on Ctrl-C."""
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError):
        logger.debug("Signal handlers unavailable; Ctrl-C will not cancel cleanly")

    oracle = get_oracle(tier)
    results: list[tuple[str, RunResult]] = []
    for kind in kinds:
        if cancel_event.is_set():
            break

        print_heading(f"Running {kind} state machine")
        machine = create_state_machine(kind, oracle=oracle)
        if kind == "problemSolving":
            machine.set_data(INITIAL_PROBLEM, problem)
        machine.subscribe(print_transition)

        result = await run_machine(
            machine,
            max_iterations=max_iterations,
            cancel_event=cancel_event,
            step_delay=step_delay,
        )
        results.append((kind, result))

        console.print(render_result(kind, result))
        if (failures := render_failures(result)) is not None:
            console.print(failures)

    return results


def main(argv: list[str] | None = None) -> int:
    """Run the requested scenarios; exit 0 only if every goal was reached."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    console.print(f"[heading]mst[/heading] [muted](v{VERSION})[/muted]")

    if args.list:
        print_scenarios(list(SCENARIOS))
        return 0

    unknown = [k for k in args.kinds if k not in SCENARIOS]
    if unknown:
        parser.error(f"Unknown scenario(s): {', '.join(unknown)}")
    if args.max_iterations < 1:
        parser.error("--max-iterations must be at least 1")

    validate_required_env()
    tier = Tier(args.tier) if args.tier else default_tier()

    logs_dir = get_logs_dir()
    cleanup_old_logs(logs_dir)  # Clean old logs first
    log_path = setup_logging(logs_dir, verbose=args.verbose)
    logger.info("mst v%s: running %s", VERSION, ", ".join(args.kinds))
    print_path("Logging to", log_path)

    results = asyncio.run(
        run_scenarios(
            args.kinds,
            tier=tier,
            problem=args.problem,
            max_iterations=args.max_iterations,
            step_delay=args.step_delay,
        )
    )

    # Only show log path if file was actually created
    logging.shutdown()  # Ensure all handlers flushed/closed
    if log_path.exists():
        print_path("Debug log", log_path)

    ok = len(results) == len(args.kinds) and all(r.goal_reached for _, r in results)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
