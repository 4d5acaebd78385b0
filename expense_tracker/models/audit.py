"""
Audit Models for Expense Tracker

Every mutation and every user-facing failure is logged as a typed event.
This provides:
1. Traceability of what was added and removed
2. Debugging information when a command is rejected

DESIGN DECISION: Audit events go to stderr as structured logs only.
They never share a stream with the tabular output on stdout.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Schema
    SCHEMA_CREATED = "schema_created"
    
    # Persistence
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_CLEARED = "expenses_cleared"
    
    # Reads
    EXPENSES_LISTED = "expenses_listed"
    EXPENSES_SEARCHED = "expenses_searched"
    
    # Rejections
    VALIDATION_FAILED = "validation_failed"
    EXPENSE_NOT_FOUND = "expense_not_found"
    CLEAR_DECLINED = "clear_declined"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    Every significant action creates one of these.
    """
    
    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    
    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # Which expense is this about, if any?
    entity_id: Optional[int] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )
    
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.expense_added(expense_id, amount, memo)
        event = AuditEventBuilder.expense_not_found(expense_id)
    """
    
    @staticmethod
    def schema_created(table: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCHEMA_CREATED,
            description=f"Created table: {table}",
            details={"table": table},
        )
    
    @staticmethod
    def expense_added(expense_id: int, amount: str, memo: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_id=expense_id,
            description=f"Expense added: {amount}",
            details={"amount": amount, "memo": memo},
        )
    
    @staticmethod
    def expense_deleted(expense_id: int, amount: str, memo: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_id=expense_id,
            description=f"Expense deleted: {expense_id}",
            details={"amount": amount, "memo": memo},
        )
    
    @staticmethod
    def expenses_cleared(deleted_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_CLEARED,
            description=f"All expenses deleted ({deleted_count} rows)",
            details={"deleted_count": deleted_count},
        )
    
    @staticmethod
    def expenses_listed(result_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LISTED,
            severity=AuditSeverity.DEBUG,
            description="Expenses listed",
            details={"result_count": result_count},
        )
    
    @staticmethod
    def expenses_searched(query: str, result_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_SEARCHED,
            severity=AuditSeverity.DEBUG,
            description="Expenses searched",
            details={"query": query, "result_count": result_count},
        )
    
    @staticmethod
    def validation_failed(command: str, args: list[str], message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.INFO,
            description=f"Rejected arguments for {command}",
            details={"command": command, "args": args, "message": message},
        )
    
    @staticmethod
    def expense_not_found(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.INFO,
            entity_id=expense_id,
            description=f"No expense with id {expense_id}",
        )
    
    @staticmethod
    def clear_declined(answer: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CLEAR_DECLINED,
            description="User declined to clear expenses",
            details={"answer": answer},
        )
