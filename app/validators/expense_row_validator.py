"""
app/validators/expense_row_validator.py

Row-level parsing and validation for expense CSV uploads.

Expected column order: date, amount, vendor name, description.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from app.domain.expense import (
    MAX_DESCRIPTION_LENGTH,
    MAX_VENDOR_NAME_LENGTH,
    ExpenseCandidate,
    has_valid_amount_precision,
)

EXPECTED_COLUMNS = 4
HEADER_FIRST_CELLS = frozenset({"date", '"date"'})

# yyyy-MM-dd, zero padded.
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# Plain or exponent decimal notation; no NaN, Infinity or digit separators.
_AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


class RowParseError(ValueError):
    """
    Raised when one CSV row cannot be turned into an expense candidate.
    """

    def __init__(self, row_number: int, reason: str) -> None:
        super().__init__(reason)
        self.row_number = row_number
        self.reason = reason


class ExpenseRowParser:
    """
    Turns raw CSV fields into validated ExpenseCandidate values.
    """

    def is_header_row(self, rows: Sequence[Sequence[str]]) -> bool:
        """
        Return True when the first row's first cell reads "date".

        Comparison is trimmed and case-insensitive, and also accepts the
        cell with literal surrounding quotes left in place.
        """

        if not rows or not rows[0]:
            return False
        return rows[0][0].strip().lower() in HEADER_FIRST_CELLS

    def parse_row(self, fields: Sequence[str], row_number: int) -> ExpenseCandidate:
        if len(fields) < EXPECTED_COLUMNS:
            raise RowParseError(
                row_number,
                f"Expected {EXPECTED_COLUMNS} columns but found {len(fields)}.",
            )

        date_raw = fields[0].strip()
        amount_raw = fields[1].strip()
        vendor_name = fields[2].strip()
        description = fields[3].strip() if len(fields) > 3 else ""

        expense_date = self._parse_date(date_raw, row_number)
        amount = self._parse_amount(amount_raw, row_number)

        if not vendor_name:
            raise RowParseError(row_number, "Vendor name must not be blank.")
        if len(vendor_name) > MAX_VENDOR_NAME_LENGTH:
            raise RowParseError(
                row_number,
                f"Vendor name must not exceed {MAX_VENDOR_NAME_LENGTH} characters.",
            )
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise RowParseError(
                row_number,
                f"Description must not exceed {MAX_DESCRIPTION_LENGTH} characters.",
            )

        return ExpenseCandidate(
            date=expense_date,
            amount=amount,
            vendor_name=vendor_name,
            description=description,
        )

    @staticmethod
    def _parse_date(raw: str, row_number: int) -> date:
        error = RowParseError(row_number, f"Invalid date format '{raw}'. Expected yyyy-MM-dd.")
        if not _DATE_PATTERN.match(raw):
            raise error
        try:
            return datetime.strptime(raw, "%Y-%m-%d").date()
        except ValueError:
            raise error from None

    @staticmethod
    def _parse_amount(raw: str, row_number: int) -> Decimal:
        if not _AMOUNT_PATTERN.match(raw):
            raise RowParseError(row_number, f"Invalid amount '{raw}'.")
        try:
            amount = Decimal(raw)
        except InvalidOperation:
            raise RowParseError(row_number, f"Invalid amount '{raw}'.") from None

        if amount <= 0:
            raise RowParseError(row_number, "Amount must be greater than 0.")
        if not has_valid_amount_precision(amount):
            raise RowParseError(row_number, f"Invalid amount format '{raw}'.")
        return amount
