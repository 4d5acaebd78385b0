"""
Core Data Models for Expense Tracker

These models define the strict schemas for expense records.
They are designed to:
1. Enforce the amount and memo invariants at runtime
2. Give every fetched row a typed shape instead of string-keyed lookups
3. Be serializable for logging

DESIGN DECISION: Amounts are Decimal, never float.
The only place floats appear is the display total, which
sums amounts the way a calculator would.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


# Storage is NUMERIC(6,2): four integer digits, two fractional.
AMOUNT_MAX_DIGITS = 6
AMOUNT_DECIMAL_PLACES = 2
MINIMUM_AMOUNT = Decimal("0.01")

# First character must not be whitespace. The memo is stored unmodified.
MEMO_PATTERN = r"^\S"


Amount = Annotated[
    Decimal,
    Field(
        ge=MINIMUM_AMOUNT,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Amount spent, two fractional digits"
    )
]


class NewExpense(BaseModel):
    """
    An expense that has not been stored yet.
    
    The id is assigned by the store on insert, so it is absent here.
    """
    model_config = ConfigDict(frozen=True)
    
    amount: Amount
    memo: str = Field(
        ...,
        min_length=1,
        pattern=MEMO_PATTERN,
        description="Free-text description"
    )
    created_on: date = Field(
        default_factory=date.today,
        description="Date of the expense (defaults to today)"
    )


class Expense(NewExpense):
    """
    A persisted expense record.
    
    Immutable: there is no edit operation, only add and delete.
    """
    
    id: int = Field(
        ...,
        gt=0,
        description="Store-assigned identifier"
    )
    
    @classmethod
    def from_row(cls, row: Any) -> "Expense":
        """Bind a fetched row to the model column by column."""
        return cls(
            id=row.id,
            amount=row.amount,
            memo=row.memo,
            created_on=row.created_on,
        )
    
    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "id": self.id,
            "amount": str(self.amount),
            "memo": self.memo,
            "created_on": self.created_on.isoformat(),
        }
