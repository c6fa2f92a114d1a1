"""
app/services/expense_ingestion_service.py

Single-record ingestion path shared by manual entry and CSV rows:

    categorize -> detect anomaly -> persist -> return record

The anomaly check runs before the save so a record never counts towards
its own baseline.
"""

from __future__ import annotations

import logging

from app.domain.expense import ExpenseCandidate, ExpenseRecord
from app.repositories.base import ExpenseStore
from app.services.anomaly_detector import AnomalyDetector
from app.services.categorization import CategorizationStrategy

logger = logging.getLogger(__name__)


class ExpenseIngestionService:
    """
    Classifies and persists one expense candidate.
    """

    def __init__(
        self,
        *,
        expenses: ExpenseStore,
        categorizer: CategorizationStrategy,
        anomaly_detector: AnomalyDetector,
    ) -> None:
        self._expenses = expenses
        self._categorizer = categorizer
        self._anomaly_detector = anomaly_detector

    def ingest(self, candidate: ExpenseCandidate) -> ExpenseRecord:
        """
        Classify, flag, and save one candidate.

        Store failures propagate unchanged; the save is the only side effect,
        so a failed call leaves nothing behind.
        """
        logger.info(
            "Adding expense for vendor=%r amount=%s", candidate.vendor_name, candidate.amount
        )

        category = self._categorizer.categorize(candidate.vendor_name)
        is_anomaly = self._anomaly_detector.is_anomaly(category, candidate.amount)
        record = self._expenses.save(candidate, category=category, is_anomaly=is_anomaly)

        logger.info(
            "Expense saved id=%s category=%r is_anomaly=%s",
            record.id,
            record.category,
            record.is_anomaly,
        )
        return record
