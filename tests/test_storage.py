"""Tests for the SQL expense storage."""

import warnings

import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy import inspect, insert
from sqlalchemy.exc import IntegrityError, SAWarning

from expense_tracker.models.expense import NewExpense
from expense_tracker.services.storage import (
    NotFoundError,
    SqlExpenseStorage,
    expenses,
)
from expense_tracker.services.storage.sql import SQLITE_DECIMAL_WARNING


class TestSchema:
    """Tests for the idempotent schema check."""
    
    def test_table_created_on_first_run(self, engine):
        storage = SqlExpenseStorage(engine)
        assert storage.schema_created is True
        assert inspect(engine).has_table("expenses")
    
    def test_second_run_is_a_noop(self, engine):
        SqlExpenseStorage(engine).add_expense(
            NewExpense(amount=Decimal("3.29"), memo="Coffee")
        )
        storage = SqlExpenseStorage(engine)
        assert storage.schema_created is False
        assert storage.count_expenses() == 1
    
    def test_columns(self, storage, engine):
        columns = {c["name"] for c in inspect(engine).get_columns("expenses")}
        assert columns == {"id", "amount", "memo", "created_on"}
    
    def test_check_constraint_rejects_tiny_amount(self, storage, engine):
        """A direct insert that bypasses validation still hits the constraint."""
        with pytest.raises(IntegrityError):
            with engine.begin() as conn:
                conn.execute(
                    insert(expenses).values(
                        amount=Decimal("0.00"),
                        memo="Free",
                        created_on=date(2021, 6, 9),
                    )
                )
        assert storage.count_expenses() == 0


class TestAddExpense:
    """Tests for inserting expenses."""
    
    def test_add_assigns_increasing_ids(self, storage):
        first = storage.add_expense(NewExpense(amount=Decimal("1.00"), memo="A"))
        second = storage.add_expense(NewExpense(amount=Decimal("2.00"), memo="B"))
        assert first.id == 1
        assert second.id == 2
    
    @pytest.mark.parametrize("amount", ["0.01", "3.29", "14.56", "9999.99"])
    def test_amount_stored_exactly(self, storage, amount):
        added = storage.add_expense(NewExpense(amount=Decimal(amount), memo="Item"))
        fetched = storage.get_expense(added.id)
        assert fetched.amount == Decimal(amount)
    
    def test_memo_stored_unmodified(self, storage):
        memo = "Gas for Karen's Car; DROP TABLE expenses; --"
        added = storage.add_expense(NewExpense(amount=Decimal("43.23"), memo=memo))
        assert storage.get_expense(added.id).memo == memo
        assert storage.count_expenses() == 1
    
    def test_add_defaults_to_today(self, storage):
        added = storage.add_expense(NewExpense(amount=Decimal("1.00"), memo="Today"))
        assert storage.get_expense(added.id).created_on == date.today()
    
    def test_ids_not_reused_after_delete(self, storage):
        storage.add_expense(NewExpense(amount=Decimal("1.00"), memo="A"))
        second = storage.add_expense(NewExpense(amount=Decimal("2.00"), memo="B"))
        storage.delete_expense(second.id)
        third = storage.add_expense(NewExpense(amount=Decimal("3.00"), memo="C"))
        assert third.id == 3


class TestListAndSearch:
    """Tests for reading expenses back."""
    
    def test_list_returns_all_in_date_order(self, storage):
        storage.add_expense(
            NewExpense(amount=Decimal("1.00"), memo="Later", created_on=date(2021, 6, 10))
        )
        storage.add_expense(
            NewExpense(amount=Decimal("2.00"), memo="Earlier", created_on=date(2021, 6, 9))
        )
        listed = storage.list_expenses()
        assert [e.memo for e in listed] == ["Earlier", "Later"]
    
    def test_list_seeded(self, seeded_storage):
        listed = seeded_storage.list_expenses()
        assert [e.id for e in listed] == [1, 2, 3, 4, 5]
        dates = [e.created_on for e in listed]
        assert dates == sorted(dates)
    
    def test_list_empty(self, storage):
        assert storage.list_expenses() == []
    
    def test_search_is_case_insensitive_substring(self, seeded_storage):
        found = seeded_storage.search_expenses("coff")
        assert [e.id for e in found] == [2, 3]
        assert all(e.memo == "Coffee" for e in found)
    
    def test_search_matches_middle_of_memo(self, seeded_storage):
        found = seeded_storage.search_expenses("KAREN")
        assert [e.memo for e in found] == ["Gas for Karen's Car"]
    
    def test_search_treats_wildcards_literally(self, seeded_storage):
        assert seeded_storage.search_expenses("%") == []
        assert seeded_storage.search_expenses("_") == []
    
    def test_search_empty_query_matches_everything(self, seeded_storage):
        assert len(seeded_storage.search_expenses("")) == 5
    
    def test_search_no_match(self, seeded_storage):
        assert seeded_storage.search_expenses("rent") == []


class TestDelete:
    """Tests for deleting expenses."""
    
    def test_delete_removes_only_that_row(self, seeded_storage):
        deleted = seeded_storage.delete_expense(3)
        assert deleted.id == 3
        assert deleted.memo == "Coffee"
        assert seeded_storage.get_expense(3) is None
        assert [e.id for e in seeded_storage.list_expenses()] == [1, 2, 4, 5]
    
    def test_delete_missing_id_leaves_table_intact(self, seeded_storage):
        with pytest.raises(NotFoundError, match="99"):
            seeded_storage.delete_expense(99)
        assert seeded_storage.count_expenses() == 5
    
    def test_not_found_message(self, seeded_storage):
        with pytest.raises(NotFoundError) as exc_info:
            seeded_storage.delete_expense(99)
        assert exc_info.value.message == "There is no expense with the id '99'."
        assert exc_info.value.expense_id == 99
    
    def test_delete_all(self, seeded_storage):
        assert seeded_storage.delete_all_expenses() == 5
        assert seeded_storage.count_expenses() == 0
    
    def test_delete_all_on_empty_table(self, storage):
        assert storage.delete_all_expenses() == 0


class TestSqliteDecimalWarning:
    """The SQLite Decimal warning is silenced only around row fetches."""
    
    def test_no_process_wide_filter(self, storage):
        assert not any(
            message is not None and message.pattern == SQLITE_DECIMAL_WARNING
            for _, message, _, _, _ in warnings.filters
        )
    
    def test_reads_do_not_warn(self, seeded_storage):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            seeded_storage.list_expenses()
            seeded_storage.get_expense(1)
        assert not [w for w in caught if issubclass(w.category, SAWarning)]
