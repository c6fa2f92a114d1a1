"""
app/services/categorization.py

Vendor categorization strategies.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from app.domain.expense import DEFAULT_CATEGORY
from app.repositories.base import VendorMappingStore

logger = logging.getLogger(__name__)


class CategorizationStrategy(ABC):
    """Maps a vendor name to a spending category.

    Implementations must never raise for a missing vendor name and must
    never return an empty category.
    """

    @abstractmethod
    def categorize(self, vendor_name: str | None) -> str:
        """Return the category for vendor_name."""
        raise NotImplementedError("Subclasses must implement categorize()")


class RuleBasedCategorizationStrategy(CategorizationStrategy):
    """
    Looks the vendor up in the mapping table, defaulting to "Others".
    """

    def __init__(
        self,
        mappings: VendorMappingStore,
        *,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self._mappings = mappings
        self._default_category = default_category

    def categorize(self, vendor_name: str | None) -> str:
        if vendor_name is None or not vendor_name.strip():
            logger.warning(
                "Vendor name is blank; defaulting to category %r", self._default_category
            )
            return self._default_category

        normalized = vendor_name.strip()
        category = self._mappings.find_category_by_vendor_name(normalized)
        if not category:
            logger.debug(
                "No mapping found for vendor %r; defaulting to %r",
                normalized,
                self._default_category,
            )
            return self._default_category

        logger.debug("Vendor %r mapped to category %r", normalized, category)
        return category
