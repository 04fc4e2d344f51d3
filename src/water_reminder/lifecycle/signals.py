"""
Signal Handling - Graceful shutdown of the reminder loop.

Handles SIGTERM and SIGINT. A signal that arrives while the loop is
sleeping cuts the sleep short; one that arrives during a notification
lets it finish and stops the loop before the next one.
"""

import signal
import time

import structlog

logger = structlog.get_logger(__name__)


class ShutdownRequested(Exception):
    """Raised inside an interruptible sleep when a shutdown signal arrives."""


class SignalHandler:
    """Handles OS signals for graceful shutdown.

    Example:
        handler = SignalHandler()
        handler.setup()
        while not handler.should_shutdown:
            do_work()
            handler.sleep(60)
    """

    def __init__(self) -> None:
        self._signals_received: list[signal.Signals] = []
        self._shutdown = False
        self._sleeping = False

    @property
    def should_shutdown(self) -> bool:
        """Check if shutdown has been requested."""
        return self._shutdown

    @property
    def last_signal(self) -> signal.Signals | None:
        """Most recent signal received, if any."""
        return self._signals_received[-1] if self._signals_received else None

    def setup(self) -> None:
        """Install handlers for SIGTERM and SIGINT (main thread only)."""
        for sig in (signal.SIGTERM, signal.SIGINT):
            signal.signal(sig, self._handle_signal)

        logger.info("signal_handlers_registered", signals=["SIGTERM", "SIGINT"])

    def _handle_signal(self, signum: int, frame) -> None:
        sig = signal.Signals(signum)
        self._signals_received.append(sig)
        logger.info("signal_received", signal=sig.name, count=len(self._signals_received))

        self._shutdown = True

        if self._sleeping:
            raise ShutdownRequested(sig.name)

    def sleep(self, seconds: float) -> bool:
        """Sleep unless shutdown is requested.

        Returns:
            True if the full duration elapsed, False if cut short
        """
        if self._shutdown:
            return False
        self._sleeping = True
        try:
            time.sleep(seconds)
        except ShutdownRequested:
            return False
        finally:
            self._sleeping = False
        return not self._shutdown

    def trigger_shutdown(self) -> None:
        """Programmatically trigger shutdown."""
        logger.info("programmatic_shutdown")
        self._shutdown = True
