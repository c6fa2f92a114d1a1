"""
app/services package marker.
"""

from app.services.anomaly_detector import AnomalyDetector
from app.services.categorization import CategorizationStrategy, RuleBasedCategorizationStrategy
from app.services.csv_batch_service import (
    CSVBatchService,
    CSVFormatError,
    CSVUploadTooLargeError,
    get_csv_batch_service,
)
from app.services.dashboard_service import DashboardService
from app.services.expense_ingestion_service import ExpenseIngestionService

__all__ = [
    "AnomalyDetector",
    "CSVBatchService",
    "CSVFormatError",
    "CSVUploadTooLargeError",
    "CategorizationStrategy",
    "DashboardService",
    "ExpenseIngestionService",
    "RuleBasedCategorizationStrategy",
    "get_csv_batch_service",
]
