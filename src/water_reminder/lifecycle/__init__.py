"""
Lifecycle - Daemon process management.

Handles:
- PID file management (one reminder daemon per user)
- Process control (detached spawn, SIGTERM/SIGKILL, liveness probe)
- Signal handling (graceful shutdown on SIGTERM/SIGINT)
- Desktop notifications (notify-send)

Example:
    from water_reminder.config import RuntimeConfig
    from water_reminder.lifecycle import DaemonSupervisor

    supervisor = DaemonSupervisor(RuntimeConfig())
    result = supervisor.start()
    print(result.message)
"""

from .notifications import Notifier, NotifyLevel
from .pid import PIDFile
from .process import OSProcessControl, ProcessControl, process_exists
from .signals import ShutdownRequested, SignalHandler
from .supervisor import DaemonSupervisor, Outcome, Result, daemon_command

__all__ = [
    "DaemonSupervisor",
    "Notifier",
    "NotifyLevel",
    "OSProcessControl",
    "Outcome",
    "PIDFile",
    "ProcessControl",
    "Result",
    "ShutdownRequested",
    "SignalHandler",
    "daemon_command",
    "process_exists",
]
