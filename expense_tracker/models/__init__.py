"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    Expense,
    ExpenseList,
    format_amount,
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
from expense_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense
    "Expense",
    "ExpenseList",
    "format_amount",
    # Commands
    "AddCommand",
    "Command",
    "CommandResult",
    "DeleteCommand",
    "HelpCommand",
    "ListCommand",
    "SummaryCommand",
    "UpdateCommand",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
