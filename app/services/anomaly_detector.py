"""
app/services/anomaly_detector.py

Flags expenses that are abnormally large for their category.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from app.domain.expense import ANOMALY_MULTIPLIER
from app.repositories.base import ExpenseStore

logger = logging.getLogger(__name__)


class AnomalyDetector:
    """
    Compares an amount against a multiple of its category's running average.

    The category totals come from expenses already persisted, so callers must
    evaluate a candidate before saving it. A category with no history has no
    baseline and never produces an anomaly.
    """

    def __init__(
        self,
        expenses: ExpenseStore,
        *,
        multiplier: Decimal = ANOMALY_MULTIPLIER,
    ) -> None:
        self._expenses = expenses
        self._multiplier = multiplier

    def is_anomaly(self, category: str, amount: Decimal) -> bool:
        stats = self._expenses.find_category_stats(category)
        if stats is None:
            logger.debug("No existing expenses in category %r; not marking as anomaly", category)
            return False

        # amount > multiplier * (total / count), compared without dividing.
        anomaly = amount * stats.count > self._multiplier * stats.total
        logger.debug(
            "Category %r: total=%s count=%s multiplier=%s amount=%s is_anomaly=%s",
            category,
            stats.total,
            stats.count,
            self._multiplier,
            amount,
            anomaly,
        )
        return anomaly
