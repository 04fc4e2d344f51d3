"""
PID File Management - Track the reminder daemon.

Handles:
- Recording the daemon PID
- Checking if the daemon is still running
- Stale PID cleanup
- Advisory locking around check-then-write sequences
"""

import fcntl
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

import structlog

from .process import process_exists

logger = structlog.get_logger(__name__)


class PIDFile:
    """Manages the PID file of the background reminder process.

    The file holds one line, the decimal PID. Its presence is the only
    record that a daemon is believed to be running.

    Example:
        pid_file = PIDFile("~/.local/share/water-reminder/water-reminder.pid")

        if pid_file.is_running():
            print(f"Already running as PID {pid_file.read()}")
        else:
            pid_file.write(spawn())
    """

    def __init__(
        self,
        path: Path | str,
        probe: Callable[[int], bool] = process_exists,
        lock_path: Path | str | None = None,
    ) -> None:
        self.path = Path(path).expanduser()
        self.lock_path = Path(lock_path).expanduser() if lock_path else self.path.with_suffix(".lock")
        self._probe = probe

    def write(self, pid: int) -> None:
        """Record ``pid``, replacing any previous content."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write PID atomically
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(f"{pid}\n")
        tmp_path.rename(self.path)

        logger.info("pid_file_written", path=str(self.path), pid=pid)

    def remove(self) -> bool:
        """Remove PID file.

        Returns:
            True if file was removed, False if it didn't exist
        """
        try:
            self.path.unlink()
            logger.info("pid_file_removed", path=str(self.path))
            return True
        except FileNotFoundError:
            return False

    def read(self) -> int | None:
        """Read PID from file.

        Returns:
            PID as integer, or None if file doesn't exist or is invalid
        """
        try:
            pid = int(self.path.read_text().strip())
        except (FileNotFoundError, ValueError):
            return None
        return pid if pid > 0 else None

    def is_running(self) -> bool:
        """Check if the recorded process is still running.

        Also cleans up stale PID files from crashed processes. PIDs are
        recycled by the OS, so a True result is best-effort only.

        Returns:
            True if the recorded process exists
        """
        if not self.path.exists():
            return False

        pid = self.read()
        if pid is None:
            logger.warning("pid_file_invalid", path=str(self.path))
            self.remove()
            return False

        if self._probe(pid):
            return True

        # Stale PID file - process died without cleanup
        logger.warning("stale_pid_file", path=str(self.path), pid=pid)
        self.remove()
        return False

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold an exclusive advisory lock for a read-check-write sequence.

        Released on every exit path. Other PIDFile users that skip the
        lock are not blocked.
        """
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.lock_path, os.O_RDWR | os.O_CREAT, 0o600)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            yield
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            os.close(fd)
