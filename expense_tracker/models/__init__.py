"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
"""

from expense_tracker.models.expense import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    MINIMUM_AMOUNT,
    Expense,
    NewExpense,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "AMOUNT_DECIMAL_PLACES",
    "AMOUNT_MAX_DIGITS",
    "MINIMUM_AMOUNT",
    "Expense",
    "NewExpense",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
