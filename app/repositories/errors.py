"""
Repository-layer exceptions for expense storage.
"""

from __future__ import annotations


class ExpenseStoreError(RuntimeError):
    """Base exception for expense storage failures."""


class ExpensePersistenceError(ExpenseStoreError):
    """Raised when one read or write against the store fails."""


class ExpenseStoreUnavailableError(ExpenseStoreError):
    """Raised when the database cannot be reached at all."""
