"""Shared fixtures: stores run against in-memory SQLite."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine

from expense_tracker.models.expense import NewExpense
from expense_tracker.services.storage import SqlExpenseStorage


SAMPLE_EXPENSES = [
    (Decimal("14.56"), "Pencils", date(2021, 6, 9)),
    (Decimal("3.29"), "Coffee", date(2021, 6, 9)),
    (Decimal("3.29"), "Coffee", date(2021, 6, 9)),
    (Decimal("3.00"), "Stuff", date(2021, 6, 9)),
    (Decimal("43.23"), "Gas for Karen's Car", date(2021, 6, 10)),
]


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def storage(engine):
    return SqlExpenseStorage(engine)


@pytest.fixture
def seeded_storage(storage):
    """Storage holding the five sample expenses (ids 1-5)."""
    for amount, memo, created_on in SAMPLE_EXPENSES:
        storage.add_expense(
            NewExpense(amount=amount, memo=memo, created_on=created_on)
        )
    return storage
