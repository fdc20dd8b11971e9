"""
Argument Validation

Raw CLI values are strings (or missing). The validator converts them
into typed values and records every problem as a ValidationIssue.

Two policies apply:

STRICT (add):
- Any issue is an error and the command is rejected
- Nothing is loaded or written

PERMISSIVE (delete/update id, update amount, summary month):
- A bad value is a warning and is dropped
- A dropped id matches no expense, so the ledger reports it as not found
- A dropped month means no month filter
- A dropped amount leaves the stored amount alone
"""

import math
from typing import Optional

from expense_tracker.models.validation import ValidationIssue, ValidationResult


ADD_ERROR_MESSAGE = "Invalid description or amount."


class InvalidInputError(Exception):
    """Command arguments were rejected before any data was touched."""

    def __init__(self, message: str, result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.message = message
        self.result = result


def _parse_amount(field: str, raw: Optional[str], severity: str) -> tuple[Optional[float], Optional[ValidationIssue]]:
    """Parse a positive, finite amount. Returns (value, issue)."""
    if raw is None:
        return None, ValidationIssue(
            field=field,
            issue_type="missing",
            message="Amount is required",
            severity=severity,
        )
    try:
        value = float(raw)
    except ValueError:
        return None, ValidationIssue(
            field=field,
            issue_type="not_a_number",
            message=f"Amount is not a number: {raw!r}",
            severity=severity,
        )
    if math.isnan(value) or math.isinf(value):
        return None, ValidationIssue(
            field=field,
            issue_type="not_finite",
            message=f"Amount must be a finite number: {raw!r}",
            severity=severity,
        )
    if value <= 0:
        return None, ValidationIssue(
            field=field,
            issue_type="not_positive",
            message=f"Amount must be greater than zero: {raw!r}",
            severity=severity,
        )
    return value, None


def _parse_int(field: str, raw: Optional[str], label: str, severity: str = "warning") -> tuple[Optional[int], Optional[ValidationIssue]]:
    if raw is None:
        return None, ValidationIssue(
            field=field,
            issue_type="missing",
            message=f"{label} is required",
            severity=severity,
        )
    try:
        return int(raw.strip()), None
    except ValueError:
        return None, ValidationIssue(
            field=field,
            issue_type="not_an_integer",
            message=f"{label} is not an integer: {raw!r}",
            severity=severity,
        )


class ExpenseValidator:
    """Validates raw command arguments."""

    def validate_add(
        self,
        description: Optional[str],
        amount: Optional[str],
    ) -> ValidationResult:
        """Description must be non-empty; amount must be a positive number."""
        result = ValidationResult(command="add")

        if not description:
            result.issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            ))
        else:
            result.values["description"] = description

        value, issue = _parse_amount("amount", amount, severity="error")
        if issue:
            result.issues.append(issue)
        else:
            result.values["amount"] = value

        return result

    def validate_id(self, command: str, raw_id: Optional[str]) -> ValidationResult:
        """
        A missing or non-integer id is a warning. The id is carried as
        None, which no stored expense matches.
        """
        result = ValidationResult(command=command)
        value, issue = _parse_int("id", raw_id, "Expense ID")
        if issue:
            result.issues.append(issue)
        result.values["expense_id"] = value
        return result

    def validate_update(
        self,
        raw_id: Optional[str],
        description: Optional[str],
        amount: Optional[str],
    ) -> ValidationResult:
        """
        Nothing here is fatal. An empty description is treated as absent;
        a bad id or amount becomes a warning.
        """
        result = self.validate_id("update", raw_id)

        if description:
            result.values["description"] = description

        if amount is not None:
            value, issue = _parse_amount("amount", amount, severity="warning")
            if issue:
                result.issues.append(issue)
            else:
                result.values["amount"] = value

        return result

    def validate_month(self, raw_month: Optional[str]) -> ValidationResult:
        """
        A non-integer month is a warning and means no filter.
        Range is not checked.
        """
        result = ValidationResult(command="summary")
        if raw_month is None:
            return result
        value, issue = _parse_int("month", raw_month, "Month")
        if issue:
            result.issues.append(issue)
        else:
            result.values["month"] = value
        return result
