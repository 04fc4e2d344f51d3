"""
Reminder Loop - Deliver a hydration reminder on a fixed cadence.

Runs inside the background process spawned by the supervisor, or once
from the CLI (``once`` and ``test`` commands).
"""

import random

import structlog

from .eventlog import EventLog
from .lifecycle.notifications import Notifier
from .lifecycle.signals import SignalHandler
from .settings import ReminderConfig

__all__ = ["DependencyMissingError", "MESSAGES", "ReminderLoop", "TEST_MESSAGE", "TITLE"]

logger = structlog.get_logger(__name__)

TITLE = "Water Reminder"
TEST_MESSAGE = "🧪 Test notification - Water reminder is working!"

MESSAGES = (
    "💧 Time to hydrate! Drink some water 💧",
    "🚰 Stay healthy - drink water now! 🚰",
    "💙 Your body needs water - take a sip! 💙",
)


class DependencyMissingError(RuntimeError):
    """The external notifier is not installed."""


class ReminderLoop:
    """Selects a message, delivers it, logs it, sleeps, repeats.

    Settings are read once at construction; an already running loop does
    not pick up later changes to the settings file.
    """

    def __init__(
        self,
        settings: ReminderConfig,
        notifier: Notifier,
        log: EventLog,
        signal_handler: SignalHandler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.notifier = notifier
        self.log = log
        self.signal_handler = signal_handler or SignalHandler()
        self._rng = rng or random.Random()

    def select_message(self) -> str:
        """Custom message if configured, else a random built-in one."""
        if self.settings.custom_message:
            return self.settings.custom_message
        return self._rng.choice(MESSAGES)

    def check_dependencies(self) -> None:
        """Raise DependencyMissingError if notify-send is unavailable."""
        if not self.notifier.available:
            self.log.append("ERROR: notify-send not found")
            raise DependencyMissingError(
                "notify-send is not installed. Please install the libnotify-bin package."
            )

    def run_once(self, message: str | None = None) -> bool:
        """Deliver a single reminder.

        Args:
            message: Override the selected message (used by the test command)

        Returns:
            True if the notification was delivered
        """
        message = message or self.select_message()
        delivered = self.notifier.notify(
            TITLE,
            message,
            icon=self.settings.icon_path,
            sound=self.settings.sound_enabled,
        )
        if delivered:
            self.log.append(f"Reminder sent: {message}")
        else:
            self.log.append(f"Reminder failed: {message}")
            logger.warning("reminder_not_delivered", message=message)
        return delivered

    def run_continuous(self) -> None:
        """Deliver reminders until a shutdown signal arrives.

        Raises:
            DependencyMissingError: If notify-send is unavailable
        """
        self.check_dependencies()

        interval = self.settings.interval_minutes
        self.log.append(f"Water reminder started with {interval} minute intervals")
        logger.info("reminder_loop_started", interval_minutes=interval)

        while not self.signal_handler.should_shutdown:
            self.run_once()
            if not self.signal_handler.sleep(self.settings.interval_seconds):
                break

        sig = self.signal_handler.last_signal
        reason = f"by signal ({sig.name})" if sig else "by request"
        self.log.append(f"Water reminder stopped {reason}")
        logger.info("reminder_loop_stopped", signal=sig.name if sig else None)
