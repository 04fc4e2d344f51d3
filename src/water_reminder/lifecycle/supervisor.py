"""
Daemon Supervisor - Start, stop, and inspect the reminder daemon.

Owns the PID-file protocol: at most one background reminder process per
user, graceful-then-forceful termination, and self-healing liveness checks.

The supervisor never touches the OS directly. Spawning, signaling and
probing go through a ``ProcessControl`` so tests can substitute a fake.
"""

import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Sequence

import structlog

from ..config import RuntimeConfig
from ..eventlog import EventLog
from .pid import PIDFile
from .process import OSProcessControl, ProcessControl

__all__ = ["DaemonSupervisor", "Outcome", "Result", "daemon_command"]

logger = structlog.get_logger(__name__)


class Outcome(Enum):
    """Result of a supervisor operation."""

    STARTED = "started"
    ALREADY_RUNNING = "already_running"
    SPAWN_FAILED = "spawn_failed"
    STOPPED = "stopped"
    NOT_RUNNING = "not_running"
    STOP_FAILED = "stop_failed"
    RUNNING = "running"


_SUCCESS = {Outcome.STARTED, Outcome.STOPPED, Outcome.RUNNING}


@dataclass(frozen=True)
class Result:
    """Outcome plus what a caller needs to report it."""

    outcome: Outcome
    message: str
    pid: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome in _SUCCESS

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def daemon_command() -> list[str]:
    """Command line of the background reminder process."""
    return [sys.executable, "-m", "water_reminder", "run"]


class DaemonSupervisor:
    """Manages the lifecycle of the single background reminder process.

    Example:
        supervisor = DaemonSupervisor(RuntimeConfig())
        result = supervisor.start()
        print(result.message)
        sys.exit(result.exit_code)
    """

    def __init__(
        self,
        config: RuntimeConfig,
        process: ProcessControl | None = None,
        command: Sequence[str] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.process = process or OSProcessControl()
        self.command = list(command) if command else daemon_command()
        self._sleep = sleep
        self.pid_file = PIDFile(
            config.pid_file,
            probe=self.process.probe_alive,
            lock_path=config.lock_file,
        )
        self.daemon_log = EventLog(config.daemon_log, prefix="DAEMON: ")
        self.reminder_log = EventLog(config.reminder_log)

    def is_running(self) -> bool:
        """Liveness check with stale PID file reclamation."""
        return self.pid_file.is_running()

    # ─────────────────────────────────────────────────────────────────
    # Lifecycle operations
    # ─────────────────────────────────────────────────────────────────

    def start(self) -> Result:
        """Spawn the reminder daemon unless one is already running."""
        with self.pid_file.lock():
            if self.is_running():
                pid = self.pid_file.read()
                logger.info("daemon_already_running", pid=pid)
                return Result(Outcome.ALREADY_RUNNING, f"Water reminder daemon is already running (PID: {pid})", pid)

            self.daemon_log.append("Starting daemon")
            try:
                pid = self.process.spawn_detached(self.command)
            except OSError as e:
                logger.error("daemon_spawn_error", error=str(e))
                self.daemon_log.append(f"Failed to start daemon: {e}")
                return Result(Outcome.SPAWN_FAILED, f"Failed to start water reminder daemon: {e}")

            try:
                self.pid_file.write(pid)
            except OSError as e:
                logger.error("pid_file_write_error", pid=pid, error=str(e))
                self.daemon_log.append(f"Failed to record PID {pid}: {e}")
                try:
                    self.process.force_stop(pid)
                except OSError as kill_error:
                    logger.warning("signal_failed", pid=pid, signal="SIGKILL", error=str(kill_error))
                return Result(Outcome.SPAWN_FAILED, f"Failed to start water reminder daemon: {e}", pid)

        # Verify it survived startup
        self._sleep(self.config.start_grace)
        if self.is_running():
            self.daemon_log.append(f"Daemon started successfully with PID {pid}")
            logger.info("daemon_started", pid=pid)
            return Result(Outcome.STARTED, f"Water reminder daemon started successfully (PID: {pid})", pid)

        self.pid_file.remove()
        self.daemon_log.append("Failed to start daemon")
        logger.error("daemon_exited_during_startup", pid=pid)
        return Result(Outcome.SPAWN_FAILED, "Failed to start water reminder daemon", pid)

    def stop(self) -> Result:
        """Terminate the daemon: SIGTERM, wait, then SIGKILL if needed."""
        with self.pid_file.lock():
            if not self.is_running():
                return Result(Outcome.NOT_RUNNING, "Water reminder daemon is not running")

            pid = self.pid_file.read()
            self.daemon_log.append(f"Stopping daemon with PID {pid}")

            try:
                self.process.request_graceful_stop(pid)
            except OSError as e:
                self.pid_file.remove()
                self.daemon_log.append(f"Failed to stop daemon with PID {pid}: {e}")
                logger.error("signal_failed", pid=pid, signal="SIGTERM", error=str(e))
                return Result(
                    Outcome.STOP_FAILED,
                    "Failed to stop daemon (process may have already terminated)",
                    pid,
                )

            for _ in range(self.config.stop_timeout):
                if not self.process.probe_alive(pid):
                    break
                self._sleep(1)

            forced = False
            if self.process.probe_alive(pid):
                forced = True
                logger.warning("graceful_stop_timeout", pid=pid, timeout=self.config.stop_timeout)
                self.daemon_log.append(f"Daemon did not terminate gracefully, forcing PID {pid}")
                try:
                    self.process.force_stop(pid)
                except OSError as e:
                    logger.warning("signal_failed", pid=pid, signal="SIGKILL", error=str(e))

            self.pid_file.remove()
            self.daemon_log.append("Daemon stopped successfully")
            logger.info("daemon_stopped", pid=pid, forced=forced)

        message = "Water reminder daemon stopped"
        if forced:
            message += " (forced termination)"
        return Result(Outcome.STOPPED, message, pid, {"forced": forced})

    def restart(self) -> Result:
        """Stop (if running), pause, start. Reports the start result."""
        self.daemon_log.append("Restarting daemon")
        stopped = self.stop()
        if stopped.outcome is Outcome.STOP_FAILED:
            logger.warning("restart_stop_failed", pid=stopped.pid)
        self._sleep(self.config.restart_pause)
        return self.start()

    def status(self) -> Result:
        """Report whether the daemon is running, with process metadata."""
        if not self.is_running():
            return Result(Outcome.NOT_RUNNING, "Water reminder daemon is not running")

        pid = self.pid_file.read()
        return Result(
            Outcome.RUNNING,
            f"Water reminder daemon is running (PID: {pid})",
            pid,
            self.process.describe(pid),
        )

    # ─────────────────────────────────────────────────────────────────
    # Logs
    # ─────────────────────────────────────────────────────────────────

    def logs(self, n: int = 20) -> Iterator[str]:
        """Last ``n`` lines of the lifecycle log, oldest first."""
        return self.daemon_log.tail(n)

    def reminder_logs(self, n: int = 20) -> Iterator[str]:
        """Last ``n`` lines of the reminder log, oldest first."""
        return self.reminder_log.tail(n)
