"""
app/domain/expense.py

Domain models shared by the single-entry and CSV ingestion paths.
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass, field
from decimal import Decimal

DEFAULT_CATEGORY = "Others"
ANOMALY_MULTIPLIER = Decimal(3)

MAX_AMOUNT_INTEGER_DIGITS = 13
MAX_AMOUNT_FRACTION_DIGITS = 2
MAX_VENDOR_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000


@dataclass(frozen=True)
class ExpenseCandidate:
    """
    Validated expense input, not yet classified or persisted.
    """

    date: dt.date
    amount: Decimal
    vendor_name: str
    description: str | None = None


@dataclass(frozen=True)
class ExpenseRecord:
    """
    Persisted, classified expense.
    """

    id: uuid.UUID
    date: dt.date
    amount: Decimal
    vendor_name: str
    description: str | None
    category: str
    is_anomaly: bool
    created_at: dt.datetime


@dataclass(frozen=True)
class CategoryTotal:
    year: int
    month: int
    category: str
    total: Decimal


@dataclass(frozen=True)
class VendorSpend:
    vendor_name: str
    total_spend: Decimal


@dataclass(frozen=True)
class CategoryStats:
    """
    Sum and count of the persisted amounts in one category.

    Kept undivided so threshold checks stay exact when the mean is a
    repeating decimal.
    """

    total: Decimal
    count: int


@dataclass
class BatchOutcome:
    """
    Running result of one CSV batch.

    Built row by row; once every data row has been recorded,
    success_count + failure_count == total_rows.
    """

    total_rows: int = 0
    success_count: int = 0
    failure_count: int = 0
    errors: list[str] = field(default_factory=list)
    saved_records: list[ExpenseRecord] = field(default_factory=list)

    def record_success(self, record: ExpenseRecord) -> None:
        self.saved_records.append(record)
        self.success_count += 1

    def record_failure(self, row_number: int, reason: str) -> None:
        self.errors.append(f"Row {row_number}: {reason}")
        self.failure_count += 1


def has_valid_amount_precision(amount: Decimal) -> bool:
    """
    Return True when amount fits NUMERIC(15, 2): at most 13 integer digits
    and 2 fraction digits, ignoring trailing zeros.
    """

    _, digits, exponent = amount.normalize().as_tuple()
    if not isinstance(exponent, int):
        return False
    fraction_digits = max(0, -exponent)
    integer_digits = max(0, len(digits) + exponent)
    return (
        fraction_digits <= MAX_AMOUNT_FRACTION_DIGITS
        and integer_digits <= MAX_AMOUNT_INTEGER_DIGITS
    )
