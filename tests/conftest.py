"""Shared test fixtures."""

import logging
import tempfile
from pathlib import Path
from typing import Any, Sequence

import pytest
import structlog

from water_reminder.config import RuntimeConfig
from water_reminder.lifecycle import DaemonSupervisor
from water_reminder.logging import LOGGER_NAME


class FakeProcessControl:
    """In-process stand-in for the OS: no real processes are created."""

    def __init__(self) -> None:
        self.alive: set[int] = set()
        self.next_pid = 4242
        self.spawned: list[tuple[int, list[str]]] = []
        self.signals: list[tuple[int, str]] = []
        self.ignore_term = False
        self.die_on_spawn = False
        self.spawn_error: OSError | None = None
        self.term_error: OSError | None = None
        self.kill_error: OSError | None = None

    def spawn_detached(self, command: Sequence[str]) -> int:
        if self.spawn_error:
            raise self.spawn_error
        pid = self.next_pid
        self.next_pid += 1
        self.spawned.append((pid, list(command)))
        if not self.die_on_spawn:
            self.alive.add(pid)
        return pid

    def request_graceful_stop(self, pid: int) -> None:
        if self.term_error:
            raise self.term_error
        self.signals.append((pid, "SIGTERM"))
        if not self.ignore_term:
            self.alive.discard(pid)

    def force_stop(self, pid: int) -> None:
        self.signals.append((pid, "SIGKILL"))
        if self.kill_error:
            raise self.kill_error
        self.alive.discard(pid)

    def probe_alive(self, pid: int) -> bool:
        return pid in self.alive

    def describe(self, pid: int) -> dict[str, Any]:
        if pid not in self.alive:
            return {}
        return {"ppid": 1, "command": "python -m water_reminder run", "elapsed": "00:05"}


class FakeNotifier:
    """Records notifications instead of calling notify-send."""

    def __init__(self, available: bool = True, succeed: bool = True) -> None:
        self.available = available
        self.succeed = succeed
        self.calls: list[dict[str, Any]] = []
        self.on_notify = None

    def notify(self, title, body, icon=None, level=None, expire_ms=5000, sound=False) -> bool:
        self.calls.append({"title": title, "body": body, "icon": icon, "sound": sound})
        if self.on_notify:
            self.on_notify()
        return self.succeed

    @property
    def bodies(self) -> list[str]:
        return [call["body"] for call in self.calls]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def config(temp_dir):
    """Create a test configuration with temp directories."""
    return RuntimeConfig(
        runtime_dir=temp_dir / "runtime",
        config_dir=temp_dir / "config",
        log_level="DEBUG",
        start_grace=2.0,
        stop_timeout=10,
        restart_pause=2.0,
        applications_dir=temp_dir / "applications",
        autostart_dir=temp_dir / "autostart",
    )


@pytest.fixture
def fake_process():
    return FakeProcessControl()


@pytest.fixture
def sleeps():
    """Recorded sleep durations (no real waiting)."""
    return []


@pytest.fixture
def supervisor(config, fake_process, sleeps):
    return DaemonSupervisor(config, process=fake_process, sleep=sleeps.append)


@pytest.fixture
def fake_notifier():
    return FakeNotifier()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to this test's captured streams."""
    yield
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()
