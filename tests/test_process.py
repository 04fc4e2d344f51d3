"""Tests for the OS-backed process control (spawns real processes)."""

import os
import sys
import time

import pytest

from water_reminder.lifecycle import OSProcessControl, process_exists
from water_reminder.lifecycle.process import _format_elapsed

SLEEPER = [sys.executable, "-c", "import time; time.sleep(30)"]


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return False


@pytest.fixture
def control():
    control = OSProcessControl()
    yield control
    for pid, child in control._children.items():
        if child.poll() is None:
            child.kill()
            child.wait()


class TestProcessExists:
    def test_current_process(self):
        assert process_exists(os.getpid()) is True

    def test_nonexistent_process(self):
        assert process_exists(999999999) is False


class TestOSProcessControl:
    def test_spawn_and_graceful_stop(self, control):
        """SIGTERM ends a detached child."""
        pid = control.spawn_detached(SLEEPER)

        assert control.probe_alive(pid) is True

        control.request_graceful_stop(pid)

        assert _wait_until(lambda: not control.probe_alive(pid))

    def test_force_stop(self, control):
        pid = control.spawn_detached(SLEEPER)

        control.force_stop(pid)

        assert _wait_until(lambda: not control.probe_alive(pid))

    def test_spawned_child_in_new_session(self, control):
        """The child does not share the caller's session."""
        pid = control.spawn_detached(SLEEPER)

        assert os.getsid(pid) != os.getsid(0)

    def test_exited_child_not_alive(self, control):
        """An exited, unreaped child is not reported alive."""
        pid = control.spawn_detached([sys.executable, "-c", "pass"])

        assert _wait_until(lambda: not control.probe_alive(pid))

    def test_unreaped_child_dead_to_another_control(self, control):
        """A zombie spawned through one control reads as gone to a fresh one."""
        pid = control.spawn_detached(SLEEPER)
        other = OSProcessControl()

        other.request_graceful_stop(pid)

        assert _wait_until(lambda: not other.probe_alive(pid))
        assert process_exists(pid) is False

    def test_signal_to_missing_process_raises(self, control):
        with pytest.raises(OSError):
            control.request_graceful_stop(999999999)

    def test_spawn_missing_executable_raises(self, control):
        with pytest.raises(OSError):
            control.spawn_detached(["/nonexistent/water-reminder-binary"])

    def test_describe_current_process(self, control):
        info = control.describe(os.getpid())

        assert info["ppid"] == os.getppid()
        assert "started" in info
        assert "elapsed" in info

    def test_describe_missing_process(self, control):
        assert control.describe(999999999) == {}


class TestFormatElapsed:
    def test_minutes(self):
        assert _format_elapsed(65) == "01:05"

    def test_hours(self):
        assert _format_elapsed(3 * 3600 + 2 * 60 + 1) == "03:02:01"

    def test_days(self):
        assert _format_elapsed(2 * 86400 + 5) == "2-00:00:05"
