"""Command parsing and execution package."""

from expense_tracker.commands.parser import (
    HELP_TEXT,
    CommandParser,
    Invocation,
    parse_command,
)
from expense_tracker.commands.executor import CommandExecutor

__all__ = [
    "HELP_TEXT",
    "CommandExecutor",
    "CommandParser",
    "Invocation",
    "parse_command",
]
