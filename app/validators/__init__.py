"""
app/validators package marker.
"""

from app.validators.expense_row_validator import ExpenseRowParser, RowParseError

__all__ = [
    "ExpenseRowParser",
    "RowParseError",
]
