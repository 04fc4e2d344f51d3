"""
Desktop Integration - Launcher and login autostart entries.

Writes freedesktop.org ``.desktop`` files:
- a launcher under ``$XDG_DATA_HOME/applications`` opening the control menu
- an autostart entry under ``$XDG_CONFIG_HOME/autostart`` running ``start``
"""

import shlex
import shutil
import sys
from pathlib import Path

import structlog

from .config import RuntimeConfig

__all__ = [
    "DESKTOP_FILE_NAME",
    "autostart_entry",
    "control_command",
    "disable_autostart",
    "enable_autostart",
    "install_desktop_entry",
    "launcher_entry",
    "remove_desktop_entry",
]

logger = structlog.get_logger(__name__)

DESKTOP_FILE_NAME = "water-reminder.desktop"


def control_command() -> str:
    """Shell command line invoking the control CLI."""
    script = shutil.which("water-reminder")
    if script:
        return shlex.quote(script)
    return f"{shlex.quote(sys.executable)} -m water_reminder"


def launcher_entry(icon_path: str) -> str:
    return "\n".join([
        "[Desktop Entry]",
        "Version=1.0",
        "Type=Application",
        "Name=Water Reminder",
        "Comment=Stay hydrated with regular water reminders",
        f"Exec={control_command()} menu",
        f"Icon={icon_path}",
        "Terminal=true",
        "StartupNotify=false",
        "Categories=Utility;",
        "Keywords=water;health;reminder;hydration;",
        "",
    ])


def autostart_entry(icon_path: str) -> str:
    return "\n".join([
        "[Desktop Entry]",
        "Type=Application",
        "Name=Water Reminder",
        "Comment=Automatic water reminder on startup",
        f"Exec={control_command()} start",
        f"Icon={icon_path}",
        "Terminal=false",
        "StartupNotify=false",
        "Hidden=false",
        "X-GNOME-Autostart-enabled=true",
        "",
    ])


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    path.chmod(0o755)
    logger.info("desktop_entry_written", path=str(path))
    return path


def _remove(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.info("desktop_entry_removed", path=str(path))
    return True


def install_desktop_entry(config: RuntimeConfig, icon_path: str) -> Path:
    """Write the application launcher entry."""
    return _write(config.applications_dir / DESKTOP_FILE_NAME, launcher_entry(icon_path))


def remove_desktop_entry(config: RuntimeConfig) -> bool:
    return _remove(config.applications_dir / DESKTOP_FILE_NAME)


def enable_autostart(config: RuntimeConfig, icon_path: str) -> Path:
    """Start the daemon automatically on login."""
    return _write(config.autostart_dir / DESKTOP_FILE_NAME, autostart_entry(icon_path))


def disable_autostart(config: RuntimeConfig) -> bool:
    return _remove(config.autostart_dir / DESKTOP_FILE_NAME)
