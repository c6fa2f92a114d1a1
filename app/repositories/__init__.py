"""
app/repositories package marker.
"""

from app.repositories.base import ExpenseStore, VendorMappingStore
from app.repositories.errors import (
    ExpensePersistenceError,
    ExpenseStoreError,
    ExpenseStoreUnavailableError,
)
from app.repositories.expense_repository import ExpenseRepository
from app.repositories.vendor_mapping_repository import VendorMappingRepository

__all__ = [
    "ExpensePersistenceError",
    "ExpenseRepository",
    "ExpenseStore",
    "ExpenseStoreError",
    "ExpenseStoreUnavailableError",
    "VendorMappingRepository",
    "VendorMappingStore",
]
