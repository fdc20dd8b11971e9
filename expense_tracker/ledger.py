"""
Ledger Store

Owns the expense collection for the duration of one command:

    load -> compute / mutate -> (save) -> report

DESIGN DECISION: The store is an explicit object built around an injected
storage backend. Nothing here touches the filesystem directly, prints, or
exits; failures are raised as exceptions for the command layer to turn
into results.
"""

import math
from datetime import date
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense, ExpenseList, format_amount
from expense_tracker.services.storage import (
    CorruptStorageError,
    ExpenseStorageInterface,
)
from expense_tracker.validation import ADD_ERROR_MESSAGE, InvalidInputError


CORRUPT_STORAGE_MESSAGE = "Error: Invalid JSON format"
NOT_FOUND_MESSAGE = "Expense not found."
EMPTY_JSON = "[]"

TABLE_HEADER = "ID  Date       Description     Amount"


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ExpenseNotFoundError(LedgerError):
    """No stored expense has the requested id."""

    def __init__(self, expense_id: Optional[int]):
        super().__init__(NOT_FOUND_MESSAGE)
        self.expense_id = expense_id


def _is_valid_amount(amount: Optional[float]) -> bool:
    return amount is not None and math.isfinite(amount) and amount > 0


class LedgerStore:
    """
    Load, mutate and save the expense collection.

    Every public operation performs its own load, so one LedgerStore can
    serve several commands in a test without stale state.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        today: Optional[Callable[[], date]] = None,
        indent: int = 2,
    ):
        """
        Args:
            storage: Backend holding the serialized collection
            audit_logger: Where audit events go (a default one if None)
            today: Clock used to date new expenses
            indent: Indentation of the saved JSON
        """
        self._storage = storage
        self._audit = audit_logger or AuditLogger()
        self._today = today or date.today
        self._indent = indent

    @property
    def storage(self) -> ExpenseStorageInterface:
        return self._storage

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> list[Expense]:
        """
        Read the whole collection.

        A missing store is created empty. A blank store is empty. Anything
        that is not a JSON array of valid expenses with unique ids raises
        CorruptStorageError.
        """
        text = self._storage.read_text()
        if text is None:
            self._storage.create_empty(EMPTY_JSON)
            self._audit.log_storage_created(self._storage.describe())
            return []

        if not text.strip():
            return []

        try:
            expenses = ExpenseList.validate_json(text)
        except ValidationError as e:
            self._audit.log_storage_corrupt(self._storage.describe(), str(e))
            raise CorruptStorageError(CORRUPT_STORAGE_MESSAGE) from e

        seen = set()
        for expense in expenses:
            if expense.id in seen:
                self._audit.log_storage_corrupt(
                    self._storage.describe(),
                    f"duplicate id {expense.id}",
                )
                raise CorruptStorageError(CORRUPT_STORAGE_MESSAGE)
            seen.add(expense.id)

        return expenses

    def serialize(self, expenses: Iterable[Expense]) -> str:
        return ExpenseList.dump_json(list(expenses), indent=self._indent).decode("utf-8")

    def save(self, expenses: Iterable[Expense]) -> None:
        """Overwrite the store with the full collection."""
        self._storage.write_text(self.serialize(expenses))

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add(self, description: str, amount: float) -> Expense:
        """
        Append a new expense dated today.

        The id is one more than the largest stored id, or 1 for an empty
        collection.
        """
        if not description or not _is_valid_amount(amount):
            raise InvalidInputError(ADD_ERROR_MESSAGE)

        expenses = self.load()
        next_id = max((e.id for e in expenses), default=0) + 1
        expense = Expense(
            id=next_id,
            description=description,
            amount=amount,
            date=self._today(),
        )
        expenses.append(expense)
        self.save(expenses)

        self._audit.log_expense_added(expense.id, expense.description, expense.amount)
        return expense

    def list_expenses(self) -> list[Expense]:
        """All expenses in stored order. Never writes (beyond creating a missing store)."""
        expenses = self.load()
        self._audit.log_expenses_listed(len(expenses))
        return expenses

    def delete(self, expense_id: Optional[int]) -> Expense:
        """Remove the first expense with this id. A None id matches nothing."""
        expenses = self.load()
        for index, expense in enumerate(expenses):
            if expense.id == expense_id:
                del expenses[index]
                self.save(expenses)
                self._audit.log_expense_deleted(expense_id)
                return expense

        self._audit.log_expense_not_found(expense_id, "delete")
        raise ExpenseNotFoundError(expense_id)

    def update(
        self,
        expense_id: Optional[int],
        description: Optional[str] = None,
        amount: Optional[float] = None,
    ) -> Expense:
        """
        Change description and/or amount of an existing expense.

        An empty description or an amount that is not a positive finite
        number is ignored. The collection is saved even when nothing
        changed.
        """
        expenses = self.load()
        expense = next((e for e in expenses if e.id == expense_id), None)
        if expense is None:
            self._audit.log_expense_not_found(expense_id, "update")
            raise ExpenseNotFoundError(expense_id)

        changed = []
        if description:
            expense.description = description
            changed.append("description")
        if _is_valid_amount(amount):
            expense.amount = amount
            changed.append("amount")
        elif amount is not None:
            self._audit.log_update_amount_ignored(str(amount), "not a positive number")

        self.save(expenses)
        self._audit.log_expense_updated(expense_id, changed)
        return expense

    def summary(self, month: Optional[int] = None) -> float:
        """
        Sum of amounts, optionally only for expenses dated in `month`.

        The month is not range-checked; 13 simply matches nothing.
        """
        expenses = self.load()
        if month is not None:
            expenses = [e for e in expenses if e.date.month == month]

        total = float(sum(e.amount for e in expenses))
        self._audit.log_summary_computed(month, len(expenses), total)
        return total


def render_table(expenses: Iterable[Expense]) -> str:
    """Fixed-width table: header line plus one row per expense."""
    lines = [TABLE_HEADER]
    for e in expenses:
        lines.append(
            f"{str(e.id):<3} {e.date.isoformat()}  {e.description:<15} ${format_amount(e.amount)}"
        )
    return "\n".join(lines)
