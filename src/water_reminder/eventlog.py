"""
Event Logs - Append-only timestamped streams.

Two instances exist at runtime:
- the lifecycle log, written by the supervisor (``DAEMON:`` prefix)
- the reminder log, written by the reminder loop

Line format: ``[YYYY-MM-DD HH:MM:SS] <prefix><message>``
"""

from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Iterator

import structlog

__all__ = ["EventLog", "TIMESTAMP_FORMAT"]

logger = structlog.get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class EventLog:
    """Append-only log file with a tail reader.

    Example:
        log = EventLog("~/.local/share/water-reminder/daemon.log", prefix="DAEMON: ")
        log.append("Starting daemon")
        for line in log.tail(20):
            print(line)
    """

    def __init__(self, path: Path | str, prefix: str = "") -> None:
        self.path = Path(path).expanduser()
        self.prefix = prefix

    def append(self, message: str) -> None:
        """Append one timestamped line. Write errors are logged, not raised."""
        stamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        line = f"[{stamp}] {self.prefix}{message}\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as fh:
                fh.write(line)
        except OSError as e:
            logger.warning("event_log_write_failed", path=str(self.path), error=str(e))

    def tail(self, n: int = 20) -> Iterator[str]:
        """Yield the last ``n`` lines, oldest first.

        A missing log yields nothing.
        """
        if n <= 0:
            return
        try:
            with open(self.path, encoding="utf-8", errors="replace") as fh:
                last = deque((line.rstrip("\n") for line in fh), maxlen=n)
        except FileNotFoundError:
            return
        yield from last

    def exists(self) -> bool:
        return self.path.exists()
