"""
CLI Commands - Built-in command handlers.

Each handler returns a process exit code: 0 on success, 1 on failure.
"""

import argparse
import dataclasses
import shutil
import sys
from typing import Callable

import structlog

from ..config import RuntimeConfig
from ..desktop import disable_autostart, enable_autostart, install_desktop_entry, remove_desktop_entry
from ..eventlog import EventLog
from ..lifecycle import DaemonSupervisor, Notifier, Outcome, Result, SignalHandler
from ..logging import configure_logging
from ..reminder import TEST_MESSAGE, DependencyMissingError, ReminderLoop
from ..settings import ConfigStore, ReminderConfig, parse_bool
from .colors import blue, green, print_error, red, yellow

__all__ = ["BUILTIN_COMMANDS", "run_command", "show_settings", "prompt_settings"]

logger = structlog.get_logger(__name__)


def _report(result: Result) -> int:
    """Print a supervisor result in the color matching its outcome."""
    if result.ok:
        print(green(f"✅ {result.message}"))
    elif result.outcome in (Outcome.ALREADY_RUNNING, Outcome.NOT_RUNNING):
        print(yellow(result.message))
    else:
        print(red(f"❌ {result.message}"))
    return result.exit_code


# ─────────────────────────────────────────────────────────────────────────────
# Daemon management
# ─────────────────────────────────────────────────────────────────────────────


def cmd_start(args: argparse.Namespace, config: RuntimeConfig) -> int:
    print(blue("🚰 Starting Water Reminder..."))
    config.ensure_dirs()
    exit_code = _report(DaemonSupervisor(config).start())
    if exit_code == 0:
        print(yellow("💧 You'll receive reminders to stay hydrated."))
    return exit_code


def cmd_stop(args: argparse.Namespace, config: RuntimeConfig) -> int:
    print(blue("🛑 Stopping Water Reminder..."))
    exit_code = _report(DaemonSupervisor(config).stop())
    if exit_code == 0:
        print(yellow("💙 Remember to stay hydrated manually!"))
    return exit_code


def cmd_restart(args: argparse.Namespace, config: RuntimeConfig) -> int:
    print(blue("🔄 Restarting Water Reminder..."))
    config.ensure_dirs()
    return _report(DaemonSupervisor(config).restart())


def cmd_status(args: argparse.Namespace, config: RuntimeConfig) -> int:
    print(blue("📊 Water Reminder Status"))
    print("=" * 33)

    result = DaemonSupervisor(config).status()
    if result.ok:
        print(green(result.message))
        if result.details:
            print("Process info:")
            for key in ("ppid", "started", "elapsed", "command"):
                if key in result.details:
                    print(f"  {key.capitalize():<8} {result.details[key]}")
    else:
        print(yellow(result.message))

    store = ConfigStore(config.settings_file)
    if store.exists():
        print()
        print(blue("⚙️  Current Configuration:"))
        show_settings(store.load(), config)

    return result.exit_code


def cmd_logs(args: argparse.Namespace, config: RuntimeConfig) -> int:
    supervisor = DaemonSupervisor(config)
    log = supervisor.reminder_log if args.reminders else supervisor.daemon_log

    if not log.exists():
        print(yellow(f"No log file found at {log.path}"))
        return 0

    lines = supervisor.reminder_logs(args.lines) if args.reminders else supervisor.logs(args.lines)
    print(blue(f"📝 Last {args.lines} lines from {log.path.name}:"))
    print("=" * 34)
    for line in lines:
        print(line)
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Reminders
# ─────────────────────────────────────────────────────────────────────────────


def _make_loop(config: RuntimeConfig, settings: ReminderConfig, signal_handler: SignalHandler | None = None) -> ReminderLoop:
    return ReminderLoop(settings, Notifier(), EventLog(config.reminder_log), signal_handler)


def cmd_test(args: argparse.Namespace, config: RuntimeConfig) -> int:
    print(blue("🧪 Testing notification system..."))
    loop = _make_loop(config, ConfigStore(config.settings_file).load())
    try:
        loop.check_dependencies()
    except DependencyMissingError as e:
        print_error(str(e))
        return 1

    if loop.run_once(TEST_MESSAGE):
        print(green("✅ Test notification sent!"))
        return 0
    print(red("❌ Test notification failed"))
    return 1


def cmd_once(args: argparse.Namespace, config: RuntimeConfig) -> int:
    loop = _make_loop(config, ConfigStore(config.settings_file).load())
    try:
        loop.check_dependencies()
    except DependencyMissingError as e:
        print_error(str(e))
        return 1
    return 0 if loop.run_once() else 1


def cmd_run(args: argparse.Namespace, config: RuntimeConfig) -> int:
    """Foreground reminder loop; the daemon process runs this."""
    config.ensure_dirs()
    if not sys.stdout.isatty():
        configure_logging(config.log_level, log_file=config.diagnostics_log)

    settings = ConfigStore(config.settings_file).load()
    overrides = {}
    if args.interval is not None:
        overrides["interval_minutes"] = args.interval
    if args.message:
        overrides["custom_message"] = args.message
    if args.no_sound:
        overrides["sound_enabled"] = False
    settings = dataclasses.replace(settings, **overrides)

    signal_handler = SignalHandler()
    signal_handler.setup()
    loop = _make_loop(config, settings, signal_handler)

    try:
        loop.run_continuous()
    except DependencyMissingError as e:
        logger.error("dependency_missing", error=str(e))
        print_error(str(e))
        return 1
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────


def show_settings(settings: ReminderConfig, config: RuntimeConfig) -> None:
    print(f"  Interval:       {settings.interval_minutes} minutes")
    print(f"  Sound enabled:  {'true' if settings.sound_enabled else 'false'}")
    print(f"  Icon path:      {settings.icon_path}")
    print(f"  Custom message: {settings.custom_message or '(using random messages)'}")
    print(f"  Config file:    {config.settings_file}")
    print(f"  Reminder log:   {config.reminder_log}")


def prompt_settings(current: ReminderConfig, ask: Callable[[str], str] = input) -> ReminderConfig:
    """Ask for each setting, keeping the current value on empty input."""
    interval = current.interval_minutes
    while True:
        answer = ask(f"Enter reminder interval in minutes [{interval}]: ").strip()
        if not answer:
            break
        if answer.isdigit() and int(answer) > 0:
            interval = int(answer)
            break
        print(red("Please enter a positive whole number."))

    sound = current.sound_enabled
    while True:
        default = "true" if sound else "false"
        answer = ask(f"Enable sound notifications? (true/false) [{default}]: ").strip()
        if not answer:
            break
        try:
            sound = parse_bool(answer)
            break
        except ValueError:
            print(red("Please answer true or false."))

    answer = ask("Enter custom message (or press Enter to keep the current one, '-' for random messages): ")
    message = current.custom_message
    if answer.strip() == "-":
        message = ""
    elif answer.strip():
        message = answer.strip()

    return dataclasses.replace(current, interval_minutes=interval, sound_enabled=sound, custom_message=message)


def cmd_config(args: argparse.Namespace, config: RuntimeConfig) -> int:
    store = ConfigStore(config.settings_file)
    current = store.load()

    print(blue("⚙️  Water Reminder Configuration"))
    print("=" * 33)

    if args.show:
        show_settings(current, config)
        return 0

    changes = {}
    if args.interval is not None:
        changes["interval_minutes"] = args.interval
    if args.sound is not None:
        changes["sound_enabled"] = args.sound
    if args.message is not None:
        changes["custom_message"] = args.message
    if args.icon is not None:
        changes["icon_path"] = args.icon

    interactive = not changes
    if interactive:
        if not sys.stdin.isatty():
            print_error("No settings given and stdin is not a terminal. See: water-reminder config --help")
            return 1
        print("Current settings:")
        show_settings(current, config)
        print()
        updated = prompt_settings(current)
    else:
        try:
            updated = dataclasses.replace(current, **changes)
        except ValueError as e:
            print_error(str(e))
            return 1

    if not store.save(updated):
        print_error(f"Could not write {store.path}")
        return 1
    print(green("✅ Configuration saved!"))

    supervisor = DaemonSupervisor(config)
    if not supervisor.is_running():
        return 0

    restart = args.restart
    if interactive and not restart:
        answer = input("Restart water reminder to apply changes? (y/N): ")
        restart = answer.strip().lower().startswith("y")
    if restart:
        print(blue("🔄 Restarting Water Reminder..."))
        return _report(supervisor.restart())

    print(yellow("Restart the daemon to apply changes: water-reminder restart"))
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Desktop integration
# ─────────────────────────────────────────────────────────────────────────────


def cmd_install(args: argparse.Namespace, config: RuntimeConfig) -> int:
    config.ensure_dirs()
    settings = ConfigStore(config.settings_file).load()

    if not shutil.which("notify-send"):
        print(yellow("⚠️  notify-send not found. Install the libnotify-bin package to receive reminders."))

    path = install_desktop_entry(config, settings.icon_path)
    print(green(f"✅ Desktop entry created: {path}"))

    if args.autostart:
        path = enable_autostart(config, settings.icon_path)
        print(green(f"✅ Autostart configured: {path}"))
    return 0


def cmd_uninstall(args: argparse.Namespace, config: RuntimeConfig) -> int:
    result = DaemonSupervisor(config).stop()
    if result.outcome is not Outcome.NOT_RUNNING:
        _report(result)

    if remove_desktop_entry(config):
        print(yellow("  Removed desktop entry"))
    if disable_autostart(config):
        print(yellow("  Removed autostart entry"))

    if args.purge:
        for directory in (config.config_dir, config.runtime_dir):
            shutil.rmtree(directory, ignore_errors=True)
        print(yellow("  User data removed"))

    print(green("✅ Water Reminder uninstalled"))
    return 0


COMMANDS: dict[str, Callable[[argparse.Namespace, RuntimeConfig], int]] = {
    "start": cmd_start,
    "stop": cmd_stop,
    "restart": cmd_restart,
    "status": cmd_status,
    "logs": cmd_logs,
    "test": cmd_test,
    "config": cmd_config,
    "run": cmd_run,
    "once": cmd_once,
    "install": cmd_install,
    "uninstall": cmd_uninstall,
}

# Built-in commands ("help" and "menu" are handled by main)
BUILTIN_COMMANDS = set(COMMANDS) | {"help", "menu"}


def run_command(command: str, args: argparse.Namespace, config: RuntimeConfig) -> int:
    """Run the specified command.

    Args:
        command: Command name
        args: Parsed arguments
        config: Runtime configuration

    Returns:
        Exit code
    """
    handler = COMMANDS.get(command)
    if handler is None:
        print_error(f"Unknown command '{command}'")
        return 1
    return handler(args, config)
