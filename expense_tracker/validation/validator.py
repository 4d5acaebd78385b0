"""
Command Argument Validation

DESIGN DECISION: Every argument is checked before storage is touched.
A rejected command never mutates the expenses table.

The checks mirror the storage shape:
- AMOUNT: 1-4 integer digits, a point, exactly 2 fractional digits, > 0
- MEMO: present, first character not whitespace
- NUMBER: one or more digits, no sign, no decimal point, fits the id column

IMPORTANT: Validation NEVER silently fixes input.
The memo is stored exactly as typed.
"""

import re
from decimal import Decimal
from typing import Optional, Sequence

from pydantic import ValidationError

from expense_tracker.errors import ExpenseTrackerError
from expense_tracker.models.expense import NewExpense


AMOUNT_PATTERN = re.compile(r"\d{1,4}\.\d{2}", re.ASCII)
MEMO_PATTERN = re.compile(r"\S")
ID_PATTERN = re.compile(r"\d+", re.ASCII)

# Largest value of the INTEGER id column.
MAX_ID = 2**31 - 1

ADD_USAGE_MESSAGE = "You must provide an amount and memo."
DELETE_USAGE_MESSAGE = "You must provide an integer id."


class InputValidationError(ExpenseTrackerError):
    """Command arguments have the wrong shape."""
    pass


def is_valid_amount(amount: Optional[str]) -> bool:
    if amount is None or not AMOUNT_PATTERN.fullmatch(amount):
        return False
    return Decimal(amount) > 0


def is_valid_memo(memo: Optional[str]) -> bool:
    return memo is not None and MEMO_PATTERN.match(memo) is not None


def is_valid_id(expense_id: Optional[str]) -> bool:
    if expense_id is None or not ID_PATTERN.fullmatch(expense_id):
        return False
    if len(expense_id.lstrip("0")) > len(str(MAX_ID)):
        return False
    return int(expense_id) <= MAX_ID


class CommandValidator:
    """
    Turns raw positional arguments into typed values.
    
    Each parse_* method either returns a typed value or raises
    InputValidationError with the message the user should see.
    """
    
    def parse_add(self, args: Sequence[str]) -> NewExpense:
        """
        Validate `add AMOUNT MEMO [DATE]`.
        
        A third argument is accepted but not used: expenses are always
        recorded with today's date.
        """
        amount = args[0] if len(args) > 0 else None
        memo = args[1] if len(args) > 1 else None
        
        if not (is_valid_amount(amount) and is_valid_memo(memo)):
            raise InputValidationError(ADD_USAGE_MESSAGE)
        
        try:
            return NewExpense(amount=Decimal(amount), memo=memo)
        except ValidationError as e:
            raise InputValidationError(ADD_USAGE_MESSAGE) from e
    
    def parse_delete(self, args: Sequence[str]) -> int:
        """Validate `delete NUMBER`."""
        expense_id = args[0] if args else None
        
        if not is_valid_id(expense_id):
            raise InputValidationError(DELETE_USAGE_MESSAGE)
        
        return int(expense_id)
    
    def parse_search(self, args: Sequence[str]) -> str:
        """A missing query searches for the empty string, which matches every memo."""
        return args[0] if args else ""
