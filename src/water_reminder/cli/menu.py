"""
Interactive control menu, shown when the CLI runs without a command
in a terminal (and by the desktop launcher).
"""

import argparse
from typing import Callable

from ..config import RuntimeConfig
from . import commands
from .colors import blue, bold, green, red
from .parser import create_parser

MENU_ITEMS = (
    ("1", "▶️  Start reminders"),
    ("2", "⏹️  Stop reminders"),
    ("3", "🔄 Restart reminders"),
    ("4", "📊 Show status"),
    ("5", "📝 View logs"),
    ("6", "🧪 Test notification"),
    ("7", "⚙️  Configure settings"),
    ("8", "❓ Help"),
    ("9", "🚪 Exit"),
)


def _print_menu() -> None:
    print()
    print(bold(blue("🚰 Water Reminder Control Panel")))
    print("=" * 33)
    for key, label in MENU_ITEMS:
        print(f"{key}) {label}")
    print()


def _ask_lines(ask: Callable[[str], str]) -> int:
    answer = ask("How many log lines to show? [20]: ").strip()
    if answer.isdigit():
        return int(answer)
    return 20


def run_menu(config: RuntimeConfig, ask: Callable[[str], str] = input) -> int:
    """Loop over the menu until the user exits.

    Returns:
        Exit code (always 0; individual command failures are shown inline)
    """
    config_args = argparse.Namespace(
        show=False, interval=None, sound=None, message=None, icon=None, restart=False,
    )

    while True:
        _print_menu()
        try:
            choice = ask("Select option (1-9): ").strip()
        except EOFError:
            choice = "9"
        print()

        if choice == "1":
            commands.cmd_start(argparse.Namespace(), config)
        elif choice == "2":
            commands.cmd_stop(argparse.Namespace(), config)
        elif choice == "3":
            commands.cmd_restart(argparse.Namespace(), config)
        elif choice == "4":
            commands.cmd_status(argparse.Namespace(), config)
        elif choice == "5":
            args = argparse.Namespace(lines=_ask_lines(ask), reminders=False)
            commands.cmd_logs(args, config)
        elif choice == "6":
            commands.cmd_test(argparse.Namespace(), config)
        elif choice == "7":
            commands.cmd_config(config_args, config)
        elif choice == "8":
            create_parser().print_help()
        elif choice == "9":
            print(green("💧 Stay hydrated! Goodbye!"))
            return 0
        else:
            print(red("Invalid option. Please choose 1-9."))
