"""
Command Dispatcher for Expense Tracker

This module ties together all the components and maps one command
token plus its positional arguments to an expense operation:

    add AMOUNT MEMO [DATE] | clear | list | delete NUMBER | search QUERY

Anything else prints the help text.

DESIGN DECISION: The dispatcher never prints and never exits.
It returns the text to show, or raises an ExpenseTrackerError.
The CLI entry point decides what reaches the terminal and the exit code.
"""

from typing import Callable, Optional, Sequence

from expense_tracker.audit import AuditLogger
from expense_tracker.errors import ExpenseTrackerError
from expense_tracker.services.expenses import ExpenseService
from expense_tracker.services.storage import (
    EXPENSES_TABLE,
    ExpenseStorageInterface,
    SqlExpenseStorage,
)
from expense_tracker.validation import CommandValidator, InputValidationError


HELP_TEXT = """An expense recording system

Commands:

add AMOUNT MEMO [DATE] - record a new expense
clear - delete all expenses
list - list all expenses
delete NUMBER - remove expense with id NUMBER
search QUERY - list expenses with a matching memo field"""

CLEAR_PROMPT = "This will remove all expenses. Are you sure? (y/n)"


class AbortedError(ExpenseTrackerError):
    """The user declined a confirmation. Nothing is printed."""
    
    def __init__(self):
        super().__init__("")


# Shows a prompt and returns the single key the user pressed.
KeyReader = Callable[[str], str]


class CommandDispatcher:
    """
    Routes a command to the expense service.
    
    Flow:
    1. Look up the handler for the command token
    2. Validate arguments (before any storage access)
    3. Call the service
    4. Return the text to print
    """
    
    def __init__(
        self,
        service: ExpenseService,
        read_key: KeyReader,
        validator: Optional[CommandValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._service = service
        self._read_key = read_key
        self._validator = validator or CommandValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._handlers = {
            "add": self._add,
            "clear": self._clear,
            "list": self._list,
            "delete": self._delete,
            "search": self._search,
        }
    
    def dispatch(self, command: Optional[str], args: Sequence[str] = ()) -> str:
        """
        Execute one command.
        
        Returns:
            Text to print (possibly empty)
            
        Raises:
            ExpenseTrackerError: For any user-facing failure
        """
        handler = self._handlers.get(command)
        if handler is None:
            return HELP_TEXT
        
        try:
            return handler(list(args))
        except InputValidationError as e:
            self._audit_logger.log_validation_failed(command, list(args), e.message)
            raise
    
    def _add(self, args: list[str]) -> str:
        expense = self._validator.parse_add(args)
        self._service.add_expense(expense)
        return ""
    
    def _clear(self, args: list[str]) -> str:
        answer = self._read_key(CLEAR_PROMPT)
        if answer.casefold() != "y":
            self._audit_logger.log_clear_declined(answer)
            raise AbortedError()
        return self._service.delete_all_expenses()
    
    def _list(self, args: list[str]) -> str:
        return self._service.list_expenses()
    
    def _delete(self, args: list[str]) -> str:
        expense_id = self._validator.parse_delete(args)
        return self._service.delete_expense(expense_id)
    
    def _search(self, args: list[str]) -> str:
        query = self._validator.parse_search(args)
        return self._service.search_expenses(query)


def create_app_components(
    read_key: KeyReader,
    storage: Optional[ExpenseStorageInterface] = None,
) -> tuple[CommandDispatcher, ExpenseStorageInterface]:
    """
    Factory function to create all application components.
    
    Args:
        read_key: Prompt callback used by the clear confirmation.
        storage: Storage backend. If None, a SqlExpenseStorage is
                 built from settings (creating the table on first run).
                    
    Returns:
        (dispatcher, storage)
    """
    audit_logger = AuditLogger()
    
    if storage is None:
        storage = SqlExpenseStorage()
        if storage.schema_created:
            audit_logger.log_schema_created(EXPENSES_TABLE)
    
    service = ExpenseService(storage, audit_logger=audit_logger)
    dispatcher = CommandDispatcher(
        service,
        read_key=read_key,
        audit_logger=audit_logger,
    )
    
    return dispatcher, storage
