"""Supporting infrastructure module."""

from mst.support.directory import cleanup_old_logs, get_logs_dir

__all__ = ["cleanup_old_logs", "get_logs_dir"]
