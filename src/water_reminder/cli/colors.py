"""
TTY-aware terminal colors and status output for the control CLI.

Colors are disabled automatically when stdout is not a terminal
(piped, redirected, spawned from a desktop launcher without one).
"""

import sys

# ANSI color codes
_CODES = {
    "red": "\033[0;31m",
    "green": "\033[0;32m",
    "yellow": "\033[1;33m",
    "blue": "\033[0;34m",
    "bold": "\033[1m",
    "reset": "\033[0m",
}


def _is_tty() -> bool:
    return sys.stdout.isatty()


def colored(text: str, color: str) -> str:
    """Apply color to text if stdout is a TTY."""
    if not _is_tty():
        return text
    code = _CODES.get(color, "")
    if not code:
        return text
    return f"{code}{text}{_CODES['reset']}"


def red(text: str) -> str:
    return colored(text, "red")


def green(text: str) -> str:
    return colored(text, "green")


def yellow(text: str) -> str:
    return colored(text, "yellow")


def blue(text: str) -> str:
    return colored(text, "blue")


def bold(text: str) -> str:
    return colored(text, "bold")


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(red(f"Error: {message}"), file=sys.stderr)
