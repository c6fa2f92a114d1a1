"""
app/domain package marker.
"""

from app.domain.expense import (
    ANOMALY_MULTIPLIER,
    DEFAULT_CATEGORY,
    BatchOutcome,
    CategoryStats,
    CategoryTotal,
    ExpenseCandidate,
    ExpenseRecord,
    VendorSpend,
)

__all__ = [
    "ANOMALY_MULTIPLIER",
    "BatchOutcome",
    "CategoryStats",
    "CategoryTotal",
    "DEFAULT_CATEGORY",
    "ExpenseCandidate",
    "ExpenseRecord",
    "VendorSpend",
]
