"""
app/repositories/vendor_mapping_repository.py

Persistence helpers for vendor to category mappings.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.base import VendorMappingStore
from app.repositories.expense_repository import translate_store_error
from db.models.vendor_category_mapping import VendorCategoryMapping


class VendorMappingRepository(VendorMappingStore):
    """
    Repository over the vendor_category_mappings table.

    The ingestion pipeline only reads; add_all exists for seeding.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_category_by_vendor_name(self, vendor_name: str) -> str | None:
        stmt = select(VendorCategoryMapping.category).where(
            func.lower(VendorCategoryMapping.vendor_name) == vendor_name.strip().lower()
        )
        try:
            return self._session.execute(stmt).scalars().first()
        except SQLAlchemyError as exc:
            raise translate_store_error(self._session, exc, "look up vendor mapping") from exc

    def count(self) -> int:
        stmt = select(func.count()).select_from(VendorCategoryMapping)
        try:
            return int(self._session.execute(stmt).scalar_one())
        except SQLAlchemyError as exc:
            raise translate_store_error(self._session, exc, "count vendor mappings") from exc

    def add_all(self, mappings: Iterable[tuple[str, str]]) -> int:
        """
        Insert (vendor_name, category) pairs and commit. Returns the row count.
        """

        rows = [
            VendorCategoryMapping(vendor_name=vendor_name.strip(), category=category)
            for vendor_name, category in mappings
        ]
        try:
            self._session.add_all(rows)
            self._session.commit()
        except SQLAlchemyError as exc:
            raise translate_store_error(self._session, exc, "save vendor mappings") from exc
        return len(rows)
