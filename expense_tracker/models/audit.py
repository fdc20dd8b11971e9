"""
Audit Models for Expense Tracker

Every significant action (a write, a rejected input, a corrupt file) is
described by an AuditEvent and handed to the AuditLogger.

DESIGN DECISION: Audit events go to the structured log only.
The backing file holds expenses and nothing else.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Storage
    STORAGE_CREATED = "storage_created"
    STORAGE_CORRUPT = "storage_corrupt"

    # Mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    UPDATE_AMOUNT_IGNORED = "update_amount_ignored"

    # Reads
    EXPENSES_LISTED = "expenses_listed"
    SUMMARY_COMPUTED = "summary_computed"

    # Rejections
    EXPENSE_NOT_FOUND = "expense_not_found"
    INVALID_INPUT = "invalid_input"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # The expense this is about, when there is one
    expense_id: Optional[int] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "description": self.description,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, description, amount)
        event = AuditEventBuilder.expense_not_found(expense_id, "delete")
    """

    @staticmethod
    def storage_created(location: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_CREATED,
            description=f"Created empty expense store at {location}",
            details={"location": location},
        )

    @staticmethod
    def storage_corrupt(location: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_CORRUPT,
            severity=AuditSeverity.WARNING,
            description=f"Expense store at {location} could not be parsed",
            details={"location": location, "error": error},
        )

    @staticmethod
    def expense_added(expense_id: int, description: str, amount: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            expense_id=expense_id,
            description=f"Expense added: {description}",
            details={"amount": amount},
        )

    @staticmethod
    def expense_updated(expense_id: int, changed: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            description=f"Expense {expense_id} updated",
            details={"changed_fields": changed},
        )

    @staticmethod
    def expense_deleted(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            description=f"Expense {expense_id} deleted",
        )

    @staticmethod
    def update_amount_ignored(raw_amount: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_AMOUNT_IGNORED,
            severity=AuditSeverity.DEBUG,
            description="Update amount rejected, keeping stored amount",
            details={"raw_amount": raw_amount, "reason": reason},
        )

    @staticmethod
    def expenses_listed(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LISTED,
            description=f"Listed {count} expenses",
            details={"count": count},
        )

    @staticmethod
    def summary_computed(month: Optional[int], matched: int, total: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_COMPUTED,
            description="Summary computed",
            details={"month": month, "matched": matched, "total": total},
        )

    @staticmethod
    def expense_not_found(expense_id: Optional[int], command: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.INFO,
            expense_id=expense_id,
            description=f"{command}: no expense with id {expense_id}",
            details={"command": command},
        )

    @staticmethod
    def invalid_input(command: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_INPUT,
            severity=AuditSeverity.INFO,
            description=f"{command}: rejected {len(issues)} argument(s)",
            details={"command": command, "issues": issues},
        )
