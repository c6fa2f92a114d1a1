"""
Storage interfaces consumed by the ingestion pipeline.

Components receive these as constructor arguments so the pipeline can run
against the SQLAlchemy repositories or an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from app.domain.expense import CategoryStats, ExpenseCandidate, ExpenseRecord


class ExpenseStore(ABC):
    """
    Append-only expense storage.
    """

    @abstractmethod
    def find_category_stats(self, category: str) -> CategoryStats | None:
        """
        Return the sum and count of all persisted amounts in category,
        or None when the category has no expenses.
        """

    @abstractmethod
    def save(
        self,
        candidate: ExpenseCandidate,
        *,
        category: str,
        is_anomaly: bool,
    ) -> ExpenseRecord:
        """
        Persist one classified expense and return it with its id and
        creation timestamp.
        """


class VendorMappingStore(ABC):
    """
    Read-only vendor to category lookup.
    """

    @abstractmethod
    def find_category_by_vendor_name(self, vendor_name: str) -> str | None:
        """
        Return the mapped category for vendor_name, compared case-insensitively.
        """
