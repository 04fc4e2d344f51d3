"""
Desktop Notifications - Fire-and-forget reminders via notify-send.
"""

import shutil
import subprocess
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

APP_NAME = "Water Reminder"
FALLBACK_ICON = "dialog-information"
SOUND_NAME = "water-drop"
DEFAULT_EXPIRE_MS = 5000


class NotifyLevel(Enum):
    """Notification urgency level."""

    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


class Notifier:
    """Desktop notification sender.

    Core responsibility: Send one notification to the desktop.
    A missing icon file falls back to a generic themed icon.
    """

    def __init__(self, notify_send: str | None = None) -> None:
        self._notify_send = notify_send or shutil.which("notify-send")

        if not self._notify_send:
            logger.warning("notify_send_not_found", message="Desktop notifications unavailable")

    @property
    def available(self) -> bool:
        """Check if notifications are available."""
        return self._notify_send is not None

    def notify(
        self,
        title: str,
        body: str,
        icon: str | None = None,
        level: NotifyLevel = NotifyLevel.NORMAL,
        expire_ms: int = DEFAULT_EXPIRE_MS,
        sound: bool = False,
    ) -> bool:
        """Send a desktop notification.

        Args:
            title: Notification title
            body: Notification body
            icon: Icon file path; falls back to a themed icon if missing
            level: Urgency level
            expire_ms: Display time in milliseconds
            sound: Ask the notification server to play a sound

        Returns:
            True if notification was sent
        """
        if not self.available:
            return False

        cmd = [
            self._notify_send,
            f"--urgency={level.value}",
            f"--expire-time={expire_ms}",
            f"--app-name={APP_NAME}",
            f"--icon={resolve_icon(icon)}",
        ]
        if sound:
            cmd.append(f"--hint=string:sound-name:{SOUND_NAME}")
        cmd += [title, body]

        try:
            subprocess.run(cmd, check=True, capture_output=True, timeout=5)
            logger.debug("notification_sent", title=title, level=level.name)
            return True

        except subprocess.TimeoutExpired:
            logger.warning("notification_timeout", title=title)
            return False
        except subprocess.CalledProcessError as e:
            logger.warning("notification_failed", title=title, error=str(e))
            return False
        except OSError as e:
            logger.warning("notification_error", title=title, error=str(e))
            return False


def resolve_icon(icon: str | None) -> str:
    """Return ``icon`` if the file exists, else the fallback icon name."""
    if icon and Path(icon).expanduser().is_file():
        return str(Path(icon).expanduser())
    return FALLBACK_ICON
