"""
app/schemas package marker.
"""

from app.schemas.expense import (
    AnomalyCountResponse,
    CategoryTotalResponse,
    CSVUploadResponse,
    ErrorResponse,
    ExpenseCreateRequest,
    ExpenseResponse,
    TopVendorResponse,
)

__all__ = [
    "AnomalyCountResponse",
    "CSVUploadResponse",
    "CategoryTotalResponse",
    "ErrorResponse",
    "ExpenseCreateRequest",
    "ExpenseResponse",
    "TopVendorResponse",
]
