"""
Audit Logger

DESIGN DECISION: Every significant action in the tracker is logged.
This provides:
1. Traceability of every write to the backing file
2. Debugging capability for rejected input and corrupt files
3. A record of silently ignored update amounts

Log lines go to stderr so stdout carries only command output. The
default level is ERROR: rejected input, missing ids and corrupt files
are logged below it, so stderr carries only the message the user sees.
"""

import logging
import sys
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


LOGGER_NAME = "expense_tracker"


def configure_logging(level: str = "ERROR", json_output: bool = False) -> None:
    """
    Configure structlog on top of stdlib logging.

    Safe to call more than once; the stderr handler is replaced, not
    duplicated.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


# Quiet defaults until the CLI applies the configured level
configure_logging()


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Wraps a structlog logger and maps AuditEvent severities onto log
    levels.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or get_logger(f"{LOGGER_NAME}.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()
        event_name = log_dict.pop("event_type")

        if event.severity == AuditSeverity.ERROR:
            self._logger.error(event_name, **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning(event_name, **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug(event_name, **log_dict)
        else:
            self._logger.info(event_name, **log_dict)

    def log_storage_created(self, location: str) -> None:
        self.log(AuditEventBuilder.storage_created(location))

    def log_storage_corrupt(self, location: str, error: str) -> None:
        self.log(AuditEventBuilder.storage_corrupt(location, error))

    def log_expense_added(self, expense_id: int, description: str, amount: float) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, description, amount))

    def log_expense_updated(self, expense_id: int, changed: list[str]) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, changed))

    def log_expense_deleted(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id))

    def log_update_amount_ignored(self, raw_amount: str, reason: str) -> None:
        self.log(AuditEventBuilder.update_amount_ignored(raw_amount, reason))

    def log_expenses_listed(self, count: int) -> None:
        self.log(AuditEventBuilder.expenses_listed(count))

    def log_summary_computed(self, month: Optional[int], matched: int, total: float) -> None:
        self.log(AuditEventBuilder.summary_computed(month, matched, total))

    def log_expense_not_found(self, expense_id: Optional[int], command: str) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id, command))

    def log_invalid_input(self, command: str, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.invalid_input(command, issues))
