"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Point the tool at SQLite, PostgreSQL or any other SQLAlchemy backend
2. Keep display and command logic decoupled from SQL

The interface is intentionally simple - we're not building a full ORM.
Just the operations the command line needs.
"""

from abc import ABC, abstractmethod
from typing import Optional

from expense_tracker.errors import ExpenseTrackerError
from expense_tracker.models.expense import Expense, NewExpense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.
    
    Any storage implementation must implement these methods.
    """
    
    @abstractmethod
    def ensure_schema(self) -> bool:
        """
        Create the expenses table if it does not exist yet.
        
        Must be idempotent: calling it against an existing table
        is a no-op.
        
        Returns:
            True if the table was created by this call
        """
        pass
    
    @abstractmethod
    def add_expense(self, expense: NewExpense) -> Expense:
        """
        Insert one expense.
        
        Args:
            expense: The validated expense to store
            
        Returns:
            The stored expense, including its assigned id
        """
        pass
    
    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """
        Retrieve an expense by its id.
        
        Returns:
            The expense if found, None otherwise
        """
        pass
    
    @abstractmethod
    def list_expenses(self) -> list[Expense]:
        """List every expense, oldest first."""
        pass
    
    @abstractmethod
    def search_expenses(self, query: str) -> list[Expense]:
        """
        List expenses whose memo contains query, ignoring case.
        
        Args:
            query: Substring to look for. Matched literally.
            
        Returns:
            Matching expenses, oldest first
        """
        pass
    
    @abstractmethod
    def delete_expense(self, expense_id: int) -> Expense:
        """
        Delete an expense by id.
        
        Returns:
            The expense as it was before deletion
            
        Raises:
            NotFoundError: If no expense has this id. Nothing is deleted.
        """
        pass
    
    @abstractmethod
    def delete_all_expenses(self) -> int:
        """
        Delete every expense.
        
        Returns:
            Number of rows removed
        """
        pass
    
    @abstractmethod
    def count_expenses(self) -> int:
        """Number of stored expenses."""
        pass
    
    def close(self) -> None:
        """Release resources held by the backend."""
        pass


class StorageError(ExpenseTrackerError):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    
    def __init__(self, expense_id: int):
        super().__init__(f"There is no expense with the id '{expense_id}'.")
        self.expense_id = expense_id
