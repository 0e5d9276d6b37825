"""
audit_log.py - Append-only Audit Log

One line per executed operation:
    [2024-01-31 20:15:00] RENAME: /src/a.mkv -> /dst/Show - 01.mkv [SUCCESS]
plus [INFO]/[WARNING]/[ERROR] lines and session start/end markers.
"""

from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class AuditLog:
    """Append-only text log; every write is a no-op until open() succeeds"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._fp: Optional[TextIO] = None
        self.open_error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self._fp is not None

    def open(self) -> bool:
        """
        Open the log file for appending

        Returns:
            Whether the log is usable (the reason is kept in open_error)
        """
        try:
            self._fp = open(self.path, "a", encoding="utf-8")
        except OSError as e:
            self.open_error = e.strerror or str(e)
            self._fp = None
            return False
        return True

    def _write(self, line: str) -> None:
        if self._fp is None:
            return
        self._fp.write(line + "\n")
        self._fp.flush()

    def session_start(self, dry_run: bool = False) -> None:
        self._write(f"\n----- ReNamed Session Started at {_timestamp()} -----")
        if dry_run:
            self.info("Running in DRY RUN mode - no actual changes made")

    def session_end(self) -> None:
        self._write("----- ReNamed Session Ended -----\n")

    def info(self, message: str) -> None:
        self._write(f"[INFO] {message}")

    def warning(self, message: str) -> None:
        self._write(f"[WARNING] {message}")

    def error(self, message: str) -> None:
        self._write(f"[ERROR] {message}")

    def operation(self, action: str, old_path: Path, new_path: Path, success: bool) -> None:
        """Log one rename/copy operation"""
        status = "SUCCESS" if success else "FAILED"
        self._write(f"[{_timestamp()}] {action}: {old_path} -> {new_path} [{status}]")

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "AuditLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
