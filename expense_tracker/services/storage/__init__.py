"""
Storage Services Package

Provides the abstract interface and the SQL implementation for expense storage.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.sql import (
    EXPENSES_TABLE,
    SqlExpenseStorage,
    expenses,
    metadata,
)

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # SQL implementation
    "EXPENSES_TABLE",
    "SqlExpenseStorage",
    "expenses",
    "metadata",
]
