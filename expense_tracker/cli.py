"""
Command-Line Entry Point

The only place that prints and decides the process exit code:

    argv -> CommandParser -> Command -> CommandExecutor -> CommandResult
         -> stdout / stderr + exit code

Can be invoked:
- As the installed script: expense-tracker add --description Tea --amount 2
- As a module: python -m expense_tracker list
- From code: main(["summary", "--month", "5"])
"""

import sys
from pathlib import Path
from typing import Optional, Sequence

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.commands import CommandExecutor, CommandParser
from expense_tracker.config import Settings, get_settings
from expense_tracker.ledger import LedgerStore
from expense_tracker.models.command import CommandResult
from expense_tracker.services.storage import ExpenseStorageInterface, JsonFileStorage
from expense_tracker.validation import InvalidInputError


def create_executor(
    data_file: Optional[Path] = None,
    settings: Optional[Settings] = None,
    storage: Optional[ExpenseStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> CommandExecutor:
    """
    Factory function to wire storage, ledger and executor together.

    Args:
        data_file: Overrides the configured backing file
        settings: Settings to use (cached settings if None)
        storage: Pre-built backend; takes precedence over data_file

    Returns:
        A ready CommandExecutor
    """
    settings = settings or get_settings()
    if storage is None:
        storage = JsonFileStorage(data_file or settings.data_file)

    ledger = LedgerStore(
        storage,
        audit_logger=audit_logger,
        indent=settings.json_indent,
    )
    return CommandExecutor(ledger)


def run(
    argv: Sequence[str],
    settings: Optional[Settings] = None,
    storage: Optional[ExpenseStorageInterface] = None,
) -> CommandResult:
    """Parse and execute one invocation without touching stdout or exiting."""
    audit_logger = AuditLogger()
    parser = CommandParser(audit_logger=audit_logger)

    try:
        invocation = parser.parse(argv)
    except InvalidInputError as e:
        command = argv[0] if argv else "help"
        return CommandResult.failed(command, e.message)

    executor = create_executor(
        data_file=invocation.data_file,
        settings=settings,
        storage=storage,
        audit_logger=audit_logger,
    )
    return executor.execute(invocation.command)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Returns the exit code so tests can call it in-process;
    the console script wrapper passes it to sys.exit.
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    args = list(argv) if argv is not None else sys.argv[1:]
    result = run(args, settings=settings)

    if result.success:
        print(result.message)
    else:
        print(result.message, file=sys.stderr)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
