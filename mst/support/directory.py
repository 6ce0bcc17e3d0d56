"""Project directory management for the mst CLI."""

from datetime import datetime, timedelta
from pathlib import Path

from mst.core.constants import RETENTION

MST_GITIGNORE_ENTRY = ".mst/\n"


def get_logs_dir(root: Path | None = None) -> Path:
    """Get logs directory, creating .mst/logs/ if needed.

    Also adds `.mst/` to the root .gitignore if not already present.

    Args:
        root: Root path where `.mst/` should be created.
            Defaults to current working directory.

    Returns:
        Path to the logs directory.
    """
    root = root or Path.cwd()
    logs_dir = root / ".mst" / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    _ensure_gitignore(root)
    return logs_dir


def cleanup_old_logs(logs_dir: Path, retention_days: int = RETENTION.logs_days) -> int:
    """Remove log files older than retention_days.

    Args:
        logs_dir: Directory containing log files.
        retention_days: Number of days to retain logs.

    Returns:
        Number of files deleted.
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now() - timedelta(days=retention_days)
    deleted = 0

    for log_file in logs_dir.glob("*.log"):
        try:
            # Filenames look like YYYY-MM-DD-HH:MM.log
            file_date = datetime.strptime(log_file.stem[:10], "%Y-%m-%d")
            if file_date < cutoff:
                log_file.unlink()
                deleted += 1
        except (ValueError, OSError):
            continue  # Skip files with unexpected format

    return deleted


def _ensure_gitignore(root: Path) -> None:
    """Add .mst/ to root .gitignore if not already present."""
    gitignore = root / ".gitignore"
    if gitignore.exists():
        content = gitignore.read_text()
        if ".mst" not in content:
            gitignore.write_text(content.rstrip("\n") + "\n" + MST_GITIGNORE_ENTRY)
    else:
        gitignore.write_text(MST_GITIGNORE_ENTRY)
