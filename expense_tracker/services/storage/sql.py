"""
SQL Storage Implementation

DESIGN DECISION: SQLAlchemy Core is used instead of a driver-specific
client so that the same code runs against the default SQLite file and
against PostgreSQL, where the table was first designed.

TRADEOFFS:
- One table, no relationships: the ORM would add nothing
- Every statement is built with bound parameters, never interpolated
- No retries or reconnection: driver errors propagate to the caller
"""

import warnings
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    Connection,
    Date,
    Engine,
    Integer,
    MetaData,
    Numeric,
    Row,
    Table,
    Text,
    create_engine,
    delete,
    func,
    inspect,
    insert,
    select,
)
from sqlalchemy.exc import SAWarning

from expense_tracker.config import get_settings
from expense_tracker.models.expense import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    Expense,
    NewExpense,
)
from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    NotFoundError,
)


# SQLite stores NUMERIC as REAL; values are re-quantized to two places on read.
SQLITE_DECIMAL_WARNING = r"Dialect sqlite\+pysqlite does \*not\* support Decimal objects natively"


EXPENSES_TABLE = "expenses"

metadata = MetaData()

expenses = Table(
    EXPENSES_TABLE,
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "amount",
        Numeric(AMOUNT_MAX_DIGITS, AMOUNT_DECIMAL_PLACES, asdecimal=True),
        nullable=False,
    ),
    Column("memo", Text, nullable=False),
    Column("created_on", Date, nullable=False),
    CheckConstraint("amount >= 0.01", name="expenses_amount_check"),
    # Never reuse ids of deleted rows
    sqlite_autoincrement=True,
)


def _fetch_rows(conn: Connection, stmt) -> list[Row]:
    """Fetch every row of a select over expenses."""
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=SQLITE_DECIMAL_WARNING, category=SAWarning)
        return conn.execute(stmt).all()


class SqlExpenseStorage(ExpenseStorageInterface):
    """
    Expense storage backed by a relational table.
    
    The schema check runs once, on construction.
    """
    
    def __init__(self, engine: Optional[Engine] = None):
        """
        Initialize storage.
        
        Args:
            engine: SQLAlchemy engine to use.
                    If None, one is built from the database settings.
        """
        if engine is None:
            settings = get_settings().database
            engine = create_engine(settings.url, echo=settings.echo)
        self._engine = engine
        self.schema_created = self.ensure_schema()
    
    @property
    def engine(self) -> Engine:
        return self._engine
    
    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
    
    def ensure_schema(self) -> bool:
        if inspect(self._engine).has_table(EXPENSES_TABLE):
            return False
        metadata.create_all(self._engine, tables=[expenses])
        return True
    
    def add_expense(self, expense: NewExpense) -> Expense:
        stmt = insert(expenses).values(
            amount=expense.amount,
            memo=expense.memo,
            created_on=expense.created_on,
        )
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
            expense_id = result.inserted_primary_key[0]
        
        return Expense(id=expense_id, **expense.model_dump())
    
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        stmt = select(expenses).where(expenses.c.id == expense_id)
        with self._engine.connect() as conn:
            rows = _fetch_rows(conn, stmt)
        
        return Expense.from_row(rows[0]) if rows else None
    
    def list_expenses(self) -> list[Expense]:
        return self._fetch_all(select(expenses))
    
    def search_expenses(self, query: str) -> list[Expense]:
        stmt = select(expenses).where(
            expenses.c.memo.icontains(query, autoescape=True)
        )
        return self._fetch_all(stmt)
    
    def delete_expense(self, expense_id: int) -> Expense:
        with self._engine.begin() as conn:
            rows = _fetch_rows(
                conn, select(expenses).where(expenses.c.id == expense_id)
            )
            if not rows:
                raise NotFoundError(expense_id)
            
            conn.execute(delete(expenses).where(expenses.c.id == expense_id))
        
        return Expense.from_row(rows[0])
    
    def delete_all_expenses(self) -> int:
        with self._engine.begin() as conn:
            result = conn.execute(delete(expenses))
        return result.rowcount
    
    def count_expenses(self) -> int:
        stmt = select(func.count()).select_from(expenses)
        with self._engine.connect() as conn:
            return conn.execute(stmt).scalar_one()
    
    def _fetch_all(self, stmt) -> list[Expense]:
        """Run a select over expenses in display order."""
        stmt = stmt.order_by(expenses.c.created_on, expenses.c.id)
        with self._engine.connect() as conn:
            rows = _fetch_rows(conn, stmt)
        
        return [Expense.from_row(row) for row in rows]
