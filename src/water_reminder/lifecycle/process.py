"""
Process Control - The supervisor's only contact with the OS.

Spawning, signaling and probing live behind the ``ProcessControl``
protocol so the supervisor's state machine can be driven by an in-process
fake in tests.
"""

import os
import signal
import subprocess
import time
from datetime import datetime
from typing import Any, Protocol, Sequence

import psutil
import structlog

__all__ = ["OSProcessControl", "ProcessControl", "process_exists"]

logger = structlog.get_logger(__name__)


class ProcessControl(Protocol):
    """OS capabilities the supervisor depends on."""

    def spawn_detached(self, command: Sequence[str]) -> int:
        """Start ``command`` detached from the terminal, return its PID."""
        ...

    def request_graceful_stop(self, pid: int) -> None:
        """Ask the process to terminate (SIGTERM). Raises OSError on failure."""
        ...

    def force_stop(self, pid: int) -> None:
        """Terminate unconditionally (SIGKILL). Raises OSError on failure."""
        ...

    def probe_alive(self, pid: int) -> bool:
        """Zero-effect existence check."""
        ...

    def describe(self, pid: int) -> dict[str, Any]:
        """Informational metadata for status display."""
        ...


def process_exists(pid: int) -> bool:
    """Check if a process with given PID exists.

    Uses signal 0 which doesn't actually send a signal,
    just checks if the process exists and we have permission.
    A zombie (exited, not yet reaped) counts as gone.
    """
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Process exists but we don't have permission
        return True
    return not _is_zombie(pid)


def _is_zombie(pid: int) -> bool:
    """Check for an exited process; reap it if it is our child."""
    try:
        if psutil.Process(pid).status() != psutil.STATUS_ZOMBIE:
            return False
    except psutil.NoSuchProcess:
        return True
    except psutil.AccessDenied:
        return False

    try:
        os.waitpid(pid, os.WNOHANG)
    except ChildProcessError:
        # Someone else's child; its parent reaps it
        logger.debug("zombie_not_our_child", pid=pid)
    return True


class OSProcessControl:
    """ProcessControl backed by subprocess, os.kill and psutil."""

    def __init__(self) -> None:
        # Children spawned by this process; polled so an exited but
        # unreaped child is not reported alive.
        self._children: dict[int, subprocess.Popen] = {}

    def spawn_detached(self, command: Sequence[str]) -> int:
        proc = subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
            close_fds=True,
        )
        self._children[proc.pid] = proc
        logger.info("process_spawned", pid=proc.pid, command=" ".join(command))
        return proc.pid

    def request_graceful_stop(self, pid: int) -> None:
        os.kill(pid, signal.SIGTERM)
        logger.info("signal_sent", pid=pid, signal="SIGTERM")

    def force_stop(self, pid: int) -> None:
        os.kill(pid, signal.SIGKILL)
        logger.info("signal_sent", pid=pid, signal="SIGKILL")

    def probe_alive(self, pid: int) -> bool:
        child = self._children.get(pid)
        if child is not None:
            return child.poll() is None
        return process_exists(pid)

    def describe(self, pid: int) -> dict[str, Any]:
        try:
            proc = psutil.Process(pid)
            with proc.oneshot():
                created = proc.create_time()
                return {
                    "ppid": proc.ppid(),
                    "command": " ".join(proc.cmdline()),
                    "started": datetime.fromtimestamp(created).strftime("%Y-%m-%d %H:%M:%S"),
                    "elapsed": _format_elapsed(time.time() - created),
                }
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess) as e:
            logger.debug("process_metadata_unavailable", pid=pid, error=str(e))
            return {}


def _format_elapsed(seconds: float) -> str:
    """Format like ps etime: [[dd-]hh:]mm:ss."""
    total = max(int(seconds), 0)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    if days:
        return f"{days}-{hours:02d}:{minutes:02d}:{secs:02d}"
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
