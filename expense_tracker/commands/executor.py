"""
Command Execution Engine

Runs one typed command against the ledger store and packages the outcome
as a CommandResult. This is the only layer that catches ledger and
storage errors; it turns them into failed results carrying the message
and exit code for the CLI.
"""

from expense_tracker.ledger import (
    LedgerError,
    LedgerStore,
    render_table,
)
from expense_tracker.models.command import (
    AddCommand,
    Command,
    CommandResult,
    DeleteCommand,
    HelpCommand,
    ListCommand,
    SummaryCommand,
    UpdateCommand,
)
from expense_tracker.models.expense import format_amount
from expense_tracker.commands.parser import HELP_TEXT
from expense_tracker.services.storage import StorageError
from expense_tracker.validation import InvalidInputError


class CommandExecutor:
    """
    Executes typed commands against a LedgerStore.

    GUARANTEES:
    - Never raises for expected failures (bad input, unknown id, bad file)
    - A failed result means nothing was written
    """

    def __init__(self, ledger: LedgerStore):
        self._ledger = ledger

    def execute(self, command: Command) -> CommandResult:
        """Execute a command and return its result."""
        try:
            if isinstance(command, AddCommand):
                return self._execute_add(command)
            elif isinstance(command, ListCommand):
                return self._execute_list(command)
            elif isinstance(command, DeleteCommand):
                return self._execute_delete(command)
            elif isinstance(command, UpdateCommand):
                return self._execute_update(command)
            elif isinstance(command, SummaryCommand):
                return self._execute_summary(command)
            else:
                return self._execute_help(command)

        except (InvalidInputError, LedgerError, StorageError) as e:
            return CommandResult.failed(command.kind, str(e))

    def _execute_add(self, command: AddCommand) -> CommandResult:
        expense = self._ledger.add(command.description, command.amount)
        return CommandResult.ok(
            "add",
            f"Expense added successfully (ID: {expense.id})",
        )

    def _execute_list(self, command: ListCommand) -> CommandResult:
        expenses = self._ledger.list_expenses()
        if not expenses:
            return CommandResult.ok("list", "No expenses found.")
        return CommandResult.ok("list", render_table(expenses))

    def _execute_delete(self, command: DeleteCommand) -> CommandResult:
        self._ledger.delete(command.expense_id)
        return CommandResult.ok("delete", "Expense deleted successfully")

    def _execute_update(self, command: UpdateCommand) -> CommandResult:
        self._ledger.update(
            command.expense_id,
            description=command.description,
            amount=command.amount,
        )
        return CommandResult.ok("update", "Expense updated successfully")

    def _execute_summary(self, command: SummaryCommand) -> CommandResult:
        total = self._ledger.summary(command.month)
        scope = f" for month {command.month}" if command.month is not None else ""
        return CommandResult.ok("summary", f"Total expenses{scope}: ${format_amount(total)}")

    def _execute_help(self, command: HelpCommand) -> CommandResult:
        return CommandResult.ok("help", HELP_TEXT)
