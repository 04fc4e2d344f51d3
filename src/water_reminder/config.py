"""
Centralized runtime configuration for Water Reminder.

Configuration sources (priority order):
1. Environment variables (WATER_REMINDER_*)
2. Default values

Environment variables:
- WATER_REMINDER_RUNTIME_DIR: PID file and logs (default: ~/.local/share/water-reminder)
- WATER_REMINDER_CONFIG_DIR: User settings (default: ~/.config/water-reminder)
- WATER_REMINDER_LOG_LEVEL: Diagnostics log level inside the daemon (default: INFO)
- WATER_REMINDER_START_GRACE: Seconds to wait before verifying a new daemon (default: 2)
- WATER_REMINDER_STOP_TIMEOUT: Seconds to wait for graceful shutdown (default: 10)
- WATER_REMINDER_RESTART_PAUSE: Seconds between stop and start on restart (default: 2)

User-tunable reminder settings (interval, message, ...) are not here: they
live in the settings file managed by :mod:`water_reminder.settings`.
"""

import os
from dataclasses import dataclass
from pathlib import Path

__all__ = ["RuntimeConfig", "DEFAULT_RUNTIME_DIR", "DEFAULT_CONFIG_DIR"]

DEFAULT_RUNTIME_DIR = Path.home() / ".local/share/water-reminder"
DEFAULT_CONFIG_DIR = Path.home() / ".config/water-reminder"


def _get_env(key: str, default: str) -> str:
    """Get environment variable with WATER_REMINDER_ prefix."""
    return os.environ.get(f"WATER_REMINDER_{key}", default)


def _get_env_int(key: str, default: int) -> int:
    """Get integer environment variable."""
    return int(_get_env(key, str(default)))


def _get_env_float(key: str, default: float) -> float:
    """Get float environment variable."""
    return float(_get_env(key, str(default)))


def _get_env_path(key: str, default: Path) -> Path:
    """Get path environment variable."""
    val = os.environ.get(f"WATER_REMINDER_{key}")
    return Path(val) if val else default


def _xdg_dir(var: str, fallback: str) -> Path:
    val = os.environ.get(var)
    return Path(val) if val else Path.home() / fallback


@dataclass(frozen=True)
class RuntimeConfig:
    """Immutable runtime configuration."""

    runtime_dir: Path = _get_env_path("RUNTIME_DIR", DEFAULT_RUNTIME_DIR)
    config_dir: Path = _get_env_path("CONFIG_DIR", DEFAULT_CONFIG_DIR)
    log_level: str = _get_env("LOG_LEVEL", "INFO")

    # Supervisor timings
    start_grace: float = _get_env_float("START_GRACE", 2.0)
    stop_timeout: int = _get_env_int("STOP_TIMEOUT", 10)
    restart_pause: float = _get_env_float("RESTART_PAUSE", 2.0)

    # Desktop integration
    applications_dir: Path = _xdg_dir("XDG_DATA_HOME", ".local/share") / "applications"
    autostart_dir: Path = _xdg_dir("XDG_CONFIG_HOME", ".config") / "autostart"

    @property
    def pid_file(self) -> Path:
        """PID file path."""
        return self.runtime_dir / "water-reminder.pid"

    @property
    def lock_file(self) -> Path:
        """Advisory lock guarding the PID file."""
        return self.runtime_dir / "water-reminder.lock"

    @property
    def daemon_log(self) -> Path:
        """Lifecycle event log."""
        return self.runtime_dir / "daemon.log"

    @property
    def reminder_log(self) -> Path:
        """Reminder event log."""
        return self.runtime_dir / "water-reminder.log"

    @property
    def diagnostics_log(self) -> Path:
        """structlog output of the background process."""
        return self.runtime_dir / "diagnostics.log"

    @property
    def settings_file(self) -> Path:
        """User settings file."""
        return self.config_dir / "config.conf"

    def ensure_dirs(self) -> None:
        """Create runtime directories if they don't exist."""
        self.runtime_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)
