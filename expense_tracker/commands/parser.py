"""
Command Parser

Turns the process argument vector into one typed command. All argument
checking happens here, before the ledger is touched:

    ["add", "--description", "Coffee", "--amount", "3.5"]
        -> AddCommand(description="Coffee", amount=3.5)

No command, or an unknown one, yields HelpCommand. Unknown flags are
ignored.

Every known flag takes the token right after it as its value, even when
that token starts with a dash (`--amount -5`, `--description -refund`).
A flag followed by another known flag, or by nothing, counts as absent.
"""

import argparse
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel

from expense_tracker.audit import AuditLogger
from expense_tracker.models.command import (
    AddCommand,
    Command,
    DeleteCommand,
    HelpCommand,
    ListCommand,
    SummaryCommand,
    UpdateCommand,
)
from expense_tracker.models.validation import ValidationResult
from expense_tracker.validation import (
    ADD_ERROR_MESSAGE,
    ExpenseValidator,
    InvalidInputError,
)


PROG = "expense-tracker"

HELP_TEXT = f"""
Commands:
{PROG} add --description "Text" --amount 100
{PROG} list
{PROG} delete --id 1
{PROG} update --id 1 [--description "New"] [--amount 50]
{PROG} summary [--month 5]

Options:
--file PATH   use PATH instead of the configured expenses file
"""

# Flags accepted by each command; values are always read as strings
COMMAND_FLAGS: dict[str, tuple[str, ...]] = {
    "add": ("--description", "--amount"),
    "list": (),
    "delete": ("--id",),
    "update": ("--id", "--description", "--amount"),
    "summary": ("--month",),
}

KNOWN_FLAGS = frozenset(
    ["--file"] + [flag for flags in COMMAND_FLAGS.values() for flag in flags]
)


def bind_flag_values(argv: Sequence[str]) -> list[str]:
    """
    Rewrite `--flag value` pairs as `--flag=value`.

    argparse refuses a separate value that looks like an option
    (`--amount -5`); the joined form is always taken literally.

        ["update", "--id", "1", "--amount", "-abc"]
            -> ["update", "--id=1", "--amount=-abc"]
        ["update", "--id", "1", "--amount"]
            -> ["update", "--id=1"]
    """
    tokens = list(argv)
    bound: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token not in KNOWN_FLAGS:
            bound.append(token)
            i += 1
        elif i + 1 < len(tokens) and tokens[i + 1] not in KNOWN_FLAGS:
            bound.append(f"{token}={tokens[i + 1]}")
            i += 2
        else:
            # Bare flag
            i += 1
    return bound


class ArgumentParseError(Exception):
    """argparse rejected the argument vector."""
    pass


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str):
        raise ArgumentParseError(message)


class Invocation(BaseModel):
    """A parsed command plus invocation-wide options."""

    command: Command
    data_file: Optional[Path] = None


def _build_global_parser() -> _RaisingArgumentParser:
    parser = _RaisingArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument("--file", dest="data_file", default=None)
    return parser


def _build_command_parser(name: str) -> _RaisingArgumentParser:
    parser = _RaisingArgumentParser(
        prog=f"{PROG} {name}",
        add_help=False,
        allow_abbrev=False,
    )
    for flag in COMMAND_FLAGS[name]:
        parser.add_argument(flag, dest=flag.lstrip("-"), default=None)
    return parser


class CommandParser:
    """Builds typed commands from raw arguments."""

    def __init__(
        self,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._validator = validator or ExpenseValidator()
        self._audit = audit_logger or AuditLogger()

    def parse(self, argv: Sequence[str]) -> Invocation:
        """
        Parse a full argument vector (without the program name).

        Raises:
            InvalidInputError: If the command's arguments are rejected
        """
        try:
            options, remaining = _build_global_parser().parse_known_args(bind_flag_values(argv))
        except ArgumentParseError as e:
            raise InvalidInputError(f"Invalid options: {e}")

        data_file = Path(options.data_file) if options.data_file else None

        if not remaining or remaining[0] not in COMMAND_FLAGS:
            requested = remaining[0] if remaining else None
            return Invocation(command=HelpCommand(requested=requested), data_file=data_file)

        name, rest = remaining[0], remaining[1:]
        try:
            args, _ = _build_command_parser(name).parse_known_args(rest)
        except ArgumentParseError as e:
            self._audit.log_invalid_input(name, [{"message": str(e)}])
            if name == "add":
                raise InvalidInputError(ADD_ERROR_MESSAGE)
            # Only add has required arguments; elsewhere unreadable flags count as absent
            args = argparse.Namespace(**{
                flag.lstrip("-"): None for flag in COMMAND_FLAGS[name]
            })

        return Invocation(command=self._to_command(name, args), data_file=data_file)

    def _to_command(self, name: str, args: argparse.Namespace) -> Command:
        if name == "add":
            result = self._validator.validate_add(args.description, args.amount)
            self._check(result, ADD_ERROR_MESSAGE)
            return AddCommand(**result.values)

        elif name == "list":
            return ListCommand()

        elif name == "delete":
            result = self._validator.validate_id("delete", args.id)
            self._log_warnings(result)
            return DeleteCommand(**result.values)

        elif name == "update":
            result = self._validator.validate_update(args.id, args.description, args.amount)
            for warning in result.warnings:
                if warning.field == "amount":
                    self._audit.log_update_amount_ignored(args.amount, warning.message)
            self._log_warnings(result, skip_fields=("amount",))
            return UpdateCommand(**result.values)

        else:
            result = self._validator.validate_month(args.month)
            self._log_warnings(result)
            return SummaryCommand(**result.values)

    def _check(self, result: ValidationResult, message: str) -> None:
        if result.has_errors:
            self._audit.log_invalid_input(
                result.command,
                [issue.model_dump() for issue in result.issues],
            )
            raise InvalidInputError(message, result)

    def _log_warnings(self, result: ValidationResult, skip_fields: tuple[str, ...] = ()) -> None:
        issues = [
            issue.model_dump() for issue in result.warnings
            if issue.field not in skip_fields
        ]
        if issues:
            self._audit.log_invalid_input(result.command, issues)


def parse_command(argv: Sequence[str]) -> Command:
    """Parse an argument vector into a command, ignoring --file."""
    return CommandParser().parse(argv).command
