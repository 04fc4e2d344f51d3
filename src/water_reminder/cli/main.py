"""
CLI Main - Entry point for the `water-reminder` command.

Usage:
    water-reminder start            Start the reminder daemon
    water-reminder stop             Stop the reminder daemon
    water-reminder restart          Restart the reminder daemon
    water-reminder status           Show daemon status and configuration
    water-reminder logs [N]         Show last N log lines (default: 20)
    water-reminder test             Send a test notification
    water-reminder config [...]     Change settings
    water-reminder help             Show help
    water-reminder                  Interactive menu (in a terminal)
"""

import sys

from ..config import RuntimeConfig
from ..logging import configure_logging
from .colors import print_error
from .commands import BUILTIN_COMMANDS, run_command
from .menu import run_menu
from .parser import create_parser

__all__ = ["main"]

_VERBOSITY = {0: "WARNING", 1: "INFO"}


def main(args: list[str] | None = None) -> int:
    """Main entry point for the water-reminder CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()

    if args and args[0] not in BUILTIN_COMMANDS and not args[0].startswith("-"):
        print_error(f"Unknown command '{args[0]}'")
        print("Use 'water-reminder help' for usage information")
        return 1

    parsed = parser.parse_args(args)
    configure_logging(_VERBOSITY.get(parsed.verbose, "DEBUG"))

    config = RuntimeConfig()

    try:
        if parsed.command is None:
            if sys.stdin.isatty():
                return run_menu(config)
            parser.print_help()
            return 1
        if parsed.command == "menu":
            return run_menu(config)
        if parsed.command == "help":
            parser.print_help()
            return 0
        return run_command(parsed.command, parsed, config)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
