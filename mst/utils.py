"""Utility functions for the mst CLI."""

import logging
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from mst.console import console


def setup_logging(log_dir: Path, *, verbose: bool = False) -> Path:
    """Configure logging for the mst CLI.

    Uses delayed file creation - log file only created when first message written.

    Args:
        log_dir: Directory to store log files.
        verbose: Also log DEBUG messages to the console.

    Returns:
        Path to the log file (may not exist until first log message).
    """
    logger = logging.getLogger("mst")
    logger.handlers.clear()

    timestamp = datetime.now().strftime("%Y-%m-%d-%H:%M")
    log_path = log_dir / f"{timestamp}.log"

    file_handler = logging.FileHandler(log_path, delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(console=console, show_path=False)
        console_handler.setLevel(logging.DEBUG)
        logger.addHandler(console_handler)

    # Always capture DEBUG to file; logger must allow messages through
    logger.setLevel(logging.DEBUG)

    # Silence noisy third-party loggers
    for name in ("httpcore", "httpx", "claude_agent_sdk"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_path
