"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.expense import Expense
from db.models.vendor_category_mapping import VendorCategoryMapping

__all__ = [
    "Expense",
    "VendorCategoryMapping",
]
