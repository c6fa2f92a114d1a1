"""
tests/test_categorization.py

Unit tests for RuleBasedCategorizationStrategy.
"""

from __future__ import annotations

import pytest

from app.domain.expense import DEFAULT_CATEGORY
from app.services.categorization import CategorizationStrategy, RuleBasedCategorizationStrategy
from fakes import InMemoryVendorMappingStore


@pytest.fixture()
def categorizer(vendor_mappings: InMemoryVendorMappingStore) -> RuleBasedCategorizationStrategy:
    return RuleBasedCategorizationStrategy(vendor_mappings)


def test_is_a_categorization_strategy(categorizer: RuleBasedCategorizationStrategy) -> None:
    assert isinstance(categorizer, CategorizationStrategy)


def test_mapped_vendor_returns_category(categorizer: RuleBasedCategorizationStrategy) -> None:
    assert categorizer.categorize("Amazon") == "Shopping"


@pytest.mark.parametrize("vendor_name", ["AMAZON", "amazon", "aMaZoN", "  Amazon  "])
def test_lookup_is_case_insensitive_and_trimmed(
    categorizer: RuleBasedCategorizationStrategy, vendor_name: str
) -> None:
    assert categorizer.categorize(vendor_name) == categorizer.categorize("Amazon") == "Shopping"


def test_unmapped_vendor_defaults_to_others(categorizer: RuleBasedCategorizationStrategy) -> None:
    assert categorizer.categorize("Corner Bakery") == DEFAULT_CATEGORY == "Others"


@pytest.mark.parametrize("vendor_name", [None, "", "   ", "\t"])
def test_blank_vendor_defaults_without_lookup(
    vendor_mappings: InMemoryVendorMappingStore, vendor_name: str | None
) -> None:
    categorizer = RuleBasedCategorizationStrategy(vendor_mappings)

    assert categorizer.categorize(vendor_name) == "Others"
    assert vendor_mappings.lookups == []


def test_lookup_receives_trimmed_name(vendor_mappings: InMemoryVendorMappingStore) -> None:
    RuleBasedCategorizationStrategy(vendor_mappings).categorize("  Uber ")
    assert vendor_mappings.lookups == ["Uber"]


def test_custom_default_category() -> None:
    categorizer = RuleBasedCategorizationStrategy(
        InMemoryVendorMappingStore(), default_category="Uncategorized"
    )
    assert categorizer.categorize("Anything") == "Uncategorized"
