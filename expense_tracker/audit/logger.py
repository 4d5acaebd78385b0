"""
Audit Logger

DESIGN DECISION: Every mutation and every rejected command is logged.
This provides:
1. Traceability of what was added and removed
2. Debugging capability when a command fails

The audit logger:
- Writes JSON lines to stderr so stdout stays a clean table
- Is quiet by default (WARNING); raise the level via EXPENSES_LOG_LEVEL
"""

import logging
import sys
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_tracker.models.expense import Expense


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING") -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr.
    
    Handlers are replaced on every call so the current sys.stderr is used.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
        force=True,
    )


_SEVERITY_METHODS = {
    AuditSeverity.DEBUG: "debug",
    AuditSeverity.INFO: "info",
    AuditSeverity.WARNING: "warning",
    AuditSeverity.ERROR: "error",
}


class AuditLogger:
    """
    Central audit logging service.
    
    Logs typed events to the structured local log.
    """
    
    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("expense_tracker.audit")
    
    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        method = getattr(self._logger, _SEVERITY_METHODS[event.severity])
        method("audit_event", **event.to_log_dict())
    
    def log_schema_created(self, table: str) -> None:
        self.log(AuditEventBuilder.schema_created(table))
    
    def log_expense_added(self, expense: Expense) -> None:
        """Log expense insert."""
        event = AuditEventBuilder.expense_added(
            expense_id=expense.id,
            amount=str(expense.amount),
            memo=expense.memo,
        )
        self.log(event)
    
    def log_expense_deleted(self, expense: Expense) -> None:
        """Log expense delete."""
        event = AuditEventBuilder.expense_deleted(
            expense_id=expense.id,
            amount=str(expense.amount),
            memo=expense.memo,
        )
        self.log(event)
    
    def log_expenses_cleared(self, deleted_count: int) -> None:
        self.log(AuditEventBuilder.expenses_cleared(deleted_count))
    
    def log_expenses_listed(self, result_count: int) -> None:
        self.log(AuditEventBuilder.expenses_listed(result_count))
    
    def log_expenses_searched(self, query: str, result_count: int) -> None:
        self.log(AuditEventBuilder.expenses_searched(query, result_count))
    
    def log_validation_failed(
        self,
        command: str,
        args: list[str],
        message: str,
    ) -> None:
        """Log rejected command arguments."""
        event = AuditEventBuilder.validation_failed(
            command=command,
            args=args,
            message=message,
        )
        self.log(event)
    
    def log_expense_not_found(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id))
    
    def log_clear_declined(self, answer: str) -> None:
        self.log(AuditEventBuilder.clear_declined(answer))
