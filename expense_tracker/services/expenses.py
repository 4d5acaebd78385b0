"""
Expense Service

Wraps the storage interface with the presentation every command shares:
a count line, one fixed-width line per expense, a separator and a total.

GUARANTEES:
- Only renders rows that came back from storage
- An empty result is an error, never a "0 expenses" table
"""

from typing import Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.errors import ExpenseTrackerError
from expense_tracker.models.expense import Expense, NewExpense
from expense_tracker.services.storage import ExpenseStorageInterface, NotFoundError


SEPARATOR = "-" * 50

DELETED_HEADER = "The following expense has been deleted:"
CLEARED_MESSAGE = "All expenses have been deleted."


class NoExpensesError(ExpenseTrackerError):
    """Raised when there is nothing to display."""
    
    def __init__(self):
        super().__init__("There are no expenses.")


def count_line(count: int) -> str:
    if count == 1:
        return "There is 1 expense."
    return f"There are {count} expenses."


def format_expense(expense: Expense) -> str:
    """One right-justified line: id, date, amount, then the memo as-is."""
    return " | ".join([
        str(expense.id).rjust(3),
        expense.created_on.isoformat().rjust(10),
        str(expense.amount).rjust(12),
        expense.memo,
    ])


def total_line(expenses: list[Expense]) -> str:
    """
    Sum the amounts as floats.
    
    The total is printed with plain float-to-string conversion, so a sum
    like 3.0 prints as "3.0" rather than "3.00".
    """
    amount_sum = sum(float(expense.amount) for expense in expenses)
    return "Total " + str(amount_sum).rjust(25)


def render_expenses(expenses: list[Expense]) -> str:
    """
    Render a result set for the terminal.
    
    Raises:
        NoExpensesError: If expenses is empty
    """
    if not expenses:
        raise NoExpensesError()
    
    lines = [count_line(len(expenses))]
    lines.extend(format_expense(expense) for expense in expenses)
    lines.append(SEPARATOR)
    lines.append(total_line(expenses))
    return "\n".join(lines)


class ExpenseService:
    """
    Expense operations as the command line sees them.
    
    Each method returns the text to print. Failures are raised as
    ExpenseTrackerError subclasses.
    """
    
    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
    
    @property
    def storage(self) -> ExpenseStorageInterface:
        return self._storage
    
    def add_expense(self, expense: NewExpense) -> Expense:
        stored = self._storage.add_expense(expense)
        self._audit_logger.log_expense_added(stored)
        return stored
    
    def list_expenses(self) -> str:
        expenses = self._storage.list_expenses()
        self._audit_logger.log_expenses_listed(len(expenses))
        return render_expenses(expenses)
    
    def search_expenses(self, query: str) -> str:
        expenses = self._storage.search_expenses(query)
        self._audit_logger.log_expenses_searched(query, len(expenses))
        return render_expenses(expenses)
    
    def delete_expense(self, expense_id: int) -> str:
        """
        Delete one expense and show what was removed.
        
        Raises:
            NotFoundError: If no expense has this id
        """
        try:
            deleted = self._storage.delete_expense(expense_id)
        except NotFoundError:
            self._audit_logger.log_expense_not_found(expense_id)
            raise
        
        self._audit_logger.log_expense_deleted(deleted)
        return "\n".join([DELETED_HEADER, render_expenses([deleted])])
    
    def delete_all_expenses(self) -> str:
        deleted_count = self._storage.delete_all_expenses()
        self._audit_logger.log_expenses_cleared(deleted_count)
        return CLEARED_MESSAGE
