"""
app/repositories/expense_repository.py

Persistence layer for expense records.

Each save commits on its own: a CSV batch is a sequence of independent
writes, and later rows must see earlier ones when category totals are computed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import TypeVar

from sqlalchemy import extract, func, select
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.expense import (
    CategoryStats,
    CategoryTotal,
    ExpenseCandidate,
    ExpenseRecord,
    VendorSpend,
)
from app.repositories.base import ExpenseStore
from app.repositories.errors import (
    ExpensePersistenceError,
    ExpenseStoreError,
    ExpenseStoreUnavailableError,
)
from db.models.expense import Expense

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_expense_record(row: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=row.id,
        date=row.date,
        amount=row.amount,
        vendor_name=row.vendor_name,
        description=row.description,
        category=row.category,
        is_anomaly=row.is_anomaly,
        created_at=row.created_at,
    )


# SQLSTATEs that mean the server connection itself is gone: class 08
# (connection exception) and the 57P0x shutdown / not-accepting codes.
_CONNECTION_SQLSTATE_CLASS = "08"
_SERVER_GONE_SQLSTATES = frozenset({"57P01", "57P02", "57P03"})


def is_connection_failure(exc: SQLAlchemyError) -> bool:
    """
    True when exc means the database cannot be reached at all.

    Statement-scoped OperationalErrors (timeouts, deadlocks, serialization
    failures) return False.
    """

    if isinstance(exc, InterfaceError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    if isinstance(exc, OperationalError):
        # No statement attached: the error was raised while connecting.
        if exc.statement is None:
            return True
        sqlstate = getattr(exc.orig, "sqlstate", None) or ""
        return sqlstate.startswith(_CONNECTION_SQLSTATE_CLASS) or sqlstate in _SERVER_GONE_SQLSTATES
    return False


def translate_store_error(session: Session, exc: SQLAlchemyError, action: str) -> ExpenseStoreError:
    """
    Roll back the session and map a SQLAlchemy failure to a store error.

    Lost or refused connections become ExpenseStoreUnavailableError; every
    other failure is scoped to the single operation.
    """

    session.rollback()
    if is_connection_failure(exc):
        logger.error("Expense database unavailable while trying to %s: %s", action, exc)
        return ExpenseStoreUnavailableError("Expense database is unavailable.")
    logger.error("Expense store failure while trying to %s: %s", action, exc)
    return ExpensePersistenceError(f"Failed to {action}.")


class ExpenseRepository(ExpenseStore):
    """
    SQLAlchemy-backed expense store plus the dashboard read queries.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(
        self,
        candidate: ExpenseCandidate,
        *,
        category: str,
        is_anomaly: bool,
    ) -> ExpenseRecord:
        row = Expense(
            date=candidate.date,
            amount=candidate.amount,
            vendor_name=candidate.vendor_name.strip(),
            description=candidate.description,
            category=category,
            is_anomaly=is_anomaly,
        )
        try:
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        except SQLAlchemyError as exc:
            raise translate_store_error(self._session, exc, "save expense") from exc
        return to_expense_record(row)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def find_category_stats(self, category: str) -> CategoryStats | None:
        stmt = select(func.sum(Expense.amount), func.count(Expense.id)).where(Expense.category == category)
        total, count = self._run(lambda: self._session.execute(stmt).one(), "compute category totals")
        if not count:
            return None
        return CategoryStats(total=Decimal(total), count=int(count))

    def find_monthly_totals(self) -> list[CategoryTotal]:
        year = extract("year", Expense.date)
        month = extract("month", Expense.date)
        stmt = (
            select(year, month, Expense.category, func.sum(Expense.amount))
            .group_by(year, month, Expense.category)
            .order_by(year.desc(), month.desc(), Expense.category)
        )
        rows = self._run(lambda: self._session.execute(stmt).all(), "load monthly totals")
        return [
            CategoryTotal(
                year=int(row_year),
                month=int(row_month),
                category=category,
                total=total,
            )
            for row_year, row_month, category, total in rows
        ]

    def find_top_vendors(self, limit: int) -> list[VendorSpend]:
        total_spend = func.sum(Expense.amount)
        stmt = (
            select(Expense.vendor_name, total_spend)
            .group_by(Expense.vendor_name)
            .order_by(total_spend.desc())
            .limit(limit)
        )
        rows = self._run(lambda: self._session.execute(stmt).all(), "load top vendors")
        return [VendorSpend(vendor_name=name, total_spend=total) for name, total in rows]

    def find_anomalies(self) -> list[ExpenseRecord]:
        stmt = (
            select(Expense)
            .where(Expense.is_anomaly.is_(True))
            .order_by(Expense.date.desc())
        )
        rows = self._run(lambda: self._session.execute(stmt).scalars().all(), "load anomalies")
        return [to_expense_record(row) for row in rows]

    def count_anomalies(self) -> int:
        stmt = select(func.count()).select_from(Expense).where(Expense.is_anomaly.is_(True))
        return int(self._run(lambda: self._session.execute(stmt).scalar_one(), "count anomalies"))

    def _run(self, query: Callable[[], T], action: str) -> T:
        try:
            return query()
        except SQLAlchemyError as exc:
            raise translate_store_error(self._session, exc, action) from exc
