"""
app/api/routers/expenses.py

Expense ingestion endpoints: manual entry and CSV upload.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_csv_upload, get_expense_ingestion_service
from app.repositories.errors import ExpensePersistenceError
from app.schemas.expense import CSVUploadResponse, ExpenseCreateRequest, ExpenseResponse
from app.services.csv_batch_service import (
    CSVBatchService,
    CSVFormatError,
    get_csv_batch_service,
)
from app.services.expense_ingestion_service import ExpenseIngestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/expenses", tags=["expenses"])


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_expense(
    body: ExpenseCreateRequest,
    ingestion_service: ExpenseIngestionService = Depends(get_expense_ingestion_service),
) -> ExpenseResponse:
    """
    Classify and store one manually entered expense.
    """
    logger.info("POST /api/v1/expenses vendor=%r", body.vendor_name)
    try:
        record = ingestion_service.ingest(body.to_candidate())
    except ExpensePersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to save expense.",
        ) from exc
    return ExpenseResponse.from_record(record)


@router.post("/upload-csv", response_model=CSVUploadResponse)
def upload_csv(
    file: UploadFile = Depends(get_csv_upload),
    ingestion_service: ExpenseIngestionService = Depends(get_expense_ingestion_service),
    batch_service: CSVBatchService = Depends(get_csv_batch_service),
) -> CSVUploadResponse:
    """
    Ingest every data row of an uploaded CSV file.

    Columns: date (yyyy-MM-dd), amount, vendor name, description. A first
    row whose first cell is "date" is treated as a header. Row failures are
    reported in the response; only framing problems reject the upload.
    """
    logger.info("POST /api/v1/expenses/upload-csv filename=%r", file.filename)
    try:
        content = batch_service.read_upload(file.file)
        outcome = batch_service.ingest_csv(content=content, ingestion_service=ingestion_service)
    except CSVFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return CSVUploadResponse.from_outcome(outcome)
