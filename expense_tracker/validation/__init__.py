"""Validation package."""

from expense_tracker.validation.validator import (
    ADD_ERROR_MESSAGE,
    ExpenseValidator,
    InvalidInputError,
)

__all__ = [
    "ADD_ERROR_MESSAGE",
    "ExpenseValidator",
    "InvalidInputError",
]
