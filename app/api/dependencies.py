"""
app/api/dependencies.py

Shared FastAPI dependencies: upload validation and per-request service
wiring over one database session.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.config import get_dashboard_settings
from app.repositories.expense_repository import ExpenseRepository
from app.repositories.vendor_mapping_repository import VendorMappingRepository
from app.services.anomaly_detector import AnomalyDetector
from app.services.categorization import CategorizationStrategy, RuleBasedCategorizationStrategy
from app.services.dashboard_service import DashboardService
from app.services.expense_ingestion_service import ExpenseIngestionService
from db.session import get_db

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_expense_repository(db: Session = Depends(get_db)) -> ExpenseRepository:
    return ExpenseRepository(db)


def get_categorizer(db: Session = Depends(get_db)) -> CategorizationStrategy:
    return RuleBasedCategorizationStrategy(VendorMappingRepository(db))


def get_expense_ingestion_service(
    expenses: ExpenseRepository = Depends(get_expense_repository),
    categorizer: CategorizationStrategy = Depends(get_categorizer),
) -> ExpenseIngestionService:
    return ExpenseIngestionService(
        expenses=expenses,
        categorizer=categorizer,
        anomaly_detector=AnomalyDetector(expenses),
    )


def get_dashboard_service(
    expenses: ExpenseRepository = Depends(get_expense_repository),
) -> DashboardService:
    return DashboardService(
        expenses=expenses,
        top_vendor_limit=get_dashboard_settings().top_vendor_limit,
    )
