"""
CLI Parser - Argument parser for the water-reminder command.

Defines all subcommands and their arguments.
"""

import argparse

__all__ = ["create_parser"]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {number}")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected zero or more, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="water-reminder",
        description="Water Reminder - periodic desktop reminders to stay hydrated",
        epilog="Run without a command in a terminal for the interactive menu.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show diagnostics on stderr (-vv for debug)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("start", help="Start the reminder daemon")
    subparsers.add_parser("stop", help="Stop the reminder daemon")
    subparsers.add_parser("restart", help="Restart the reminder daemon")
    subparsers.add_parser("status", help="Show daemon status and configuration")

    # logs
    logs_parser = subparsers.add_parser("logs", help="Show recent log lines")
    logs_parser.add_argument(
        "lines",
        nargs="?",
        type=_non_negative_int,
        default=20,
        help="Number of lines to show (default: 20)",
    )
    logs_parser.add_argument(
        "-r", "--reminders",
        action="store_true",
        help="Show the reminder log instead of the daemon log",
    )

    subparsers.add_parser("test", help="Send a test notification")

    # config
    config_parser = subparsers.add_parser(
        "config",
        help="Change settings (interactive when no options are given)",
    )
    config_parser.add_argument("-i", "--interval", type=_positive_int, help="Reminder interval in minutes")
    config_parser.add_argument(
        "--sound",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable the notification sound",
    )
    config_parser.add_argument(
        "-m", "--message",
        help="Custom reminder message (empty string for random messages)",
    )
    config_parser.add_argument("--icon", help="Notification icon path")
    config_parser.add_argument("--show", action="store_true", help="Show current settings and exit")
    config_parser.add_argument(
        "--restart",
        action="store_true",
        help="Restart a running daemon to apply the new settings",
    )

    subparsers.add_parser("help", help="Show this help message")

    # run (foreground loop; this is what the daemon executes)
    run_parser = subparsers.add_parser("run", help="Run reminders in the foreground")
    run_parser.add_argument("-i", "--interval", type=_positive_int, help="Override interval in minutes")
    run_parser.add_argument("-m", "--message", help="Override reminder message")
    run_parser.add_argument("--no-sound", action="store_true", help="Disable sound for this run")

    subparsers.add_parser("once", help="Send a single reminder")

    # desktop integration
    install_parser = subparsers.add_parser("install", help="Create the desktop launcher entry")
    install_parser.add_argument(
        "--autostart",
        action="store_true",
        help="Also start reminders automatically on login",
    )
    uninstall_parser = subparsers.add_parser(
        "uninstall",
        help="Stop the daemon and remove desktop entries",
    )
    uninstall_parser.add_argument(
        "--purge",
        action="store_true",
        help="Also remove settings and logs",
    )

    subparsers.add_parser("menu", help="Interactive control menu")

    return parser
