"""
Diagnostics logging for Water Reminder.

All modules log through ``structlog.get_logger(__name__)`` with snake_case
event names and key-value context. structlog renders each event and hands
the line to the stdlib ``water_reminder`` logger, whose handler decides
where it goes:

- CLI invocations render to stderr, filtered to WARNING unless verbose
- The background process writes the diagnostics log, with rotation
  (5MB max, 3 backups)

The user-facing lifecycle and reminder streams are not structlog output;
see :mod:`water_reminder.eventlog`.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import structlog

__all__ = ["configure_logging", "LOGGER_NAME", "MAX_BYTES", "BACKUP_COUNT"]

LOGGER_NAME = "water_reminder"

# Log rotation settings
MAX_BYTES = 5 * 1024 * 1024  # 5MB
BACKUP_COUNT = 3


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """Configure structlog rendering and level filtering.

    Calling it again replaces the previous handler.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Write to this rotating file instead of stderr
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            str(log_file),
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "event"],
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger(LOGGER_NAME)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.setLevel(numeric_level)
    root.propagate = False

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
