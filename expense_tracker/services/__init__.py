"""Services package."""

from expense_tracker.services.expenses import (
    ExpenseService,
    NoExpensesError,
    render_expenses,
)
from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    NotFoundError,
    SqlExpenseStorage,
    StorageError,
)

__all__ = [
    # Expense service
    "ExpenseService",
    "NoExpensesError",
    "render_expenses",
    # Storage services
    "ExpenseStorageInterface",
    "NotFoundError",
    "SqlExpenseStorage",
    "StorageError",
]
