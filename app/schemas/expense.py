"""
app/schemas/expense.py

Request and response schemas for the expense endpoints.

JSON field names are camelCase; request bodies also accept snake_case.
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import asdict
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain.expense import (
    MAX_DESCRIPTION_LENGTH,
    MAX_VENDOR_NAME_LENGTH,
    BatchOutcome,
    CategoryTotal,
    ExpenseCandidate,
    ExpenseRecord,
    VendorSpend,
    has_valid_amount_precision,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ExpenseCreateRequest(CamelModel):
    """
    Manual expense entry. Field rules mirror CSV row validation.
    """

    date: dt.date
    amount: Decimal
    vendor_name: str
    description: str | None = None

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("Invalid amount format")
        if value <= 0:
            raise ValueError("Amount must be greater than 0")
        if not has_valid_amount_precision(value):
            raise ValueError("Invalid amount format")
        return value

    @field_validator("vendor_name")
    @classmethod
    def _check_vendor_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Vendor name is required")
        if len(stripped) > MAX_VENDOR_NAME_LENGTH:
            raise ValueError(
                f"Vendor name must not exceed {MAX_VENDOR_NAME_LENGTH} characters"
            )
        return stripped

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if len(value) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description must not exceed {MAX_DESCRIPTION_LENGTH} characters"
            )
        return value

    def to_candidate(self) -> ExpenseCandidate:
        return ExpenseCandidate(
            date=self.date,
            amount=self.amount,
            vendor_name=self.vendor_name,
            description=self.description,
        )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ExpenseResponse(CamelModel):
    id: uuid.UUID
    date: dt.date
    amount: Decimal
    vendor_name: str
    description: str | None = None
    category: str
    is_anomaly: bool
    created_at: dt.datetime

    @classmethod
    def from_record(cls, record: ExpenseRecord) -> ExpenseResponse:
        return cls.model_validate(asdict(record))


class CSVUploadResponse(CamelModel):
    """
    Outcome of one CSV batch upload.
    """

    total_rows: int = Field(..., ge=0)
    success_count: int = Field(..., ge=0)
    failure_count: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    saved_expenses: list[ExpenseResponse] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: BatchOutcome) -> CSVUploadResponse:
        return cls(
            total_rows=outcome.total_rows,
            success_count=outcome.success_count,
            failure_count=outcome.failure_count,
            errors=list(outcome.errors),
            saved_expenses=[ExpenseResponse.from_record(record) for record in outcome.saved_records],
        )


class CategoryTotalResponse(CamelModel):
    year: int
    month: int
    category: str
    total: Decimal

    @classmethod
    def from_total(cls, total: CategoryTotal) -> CategoryTotalResponse:
        return cls.model_validate(asdict(total))


class TopVendorResponse(CamelModel):
    vendor_name: str
    total_spend: Decimal

    @classmethod
    def from_spend(cls, spend: VendorSpend) -> TopVendorResponse:
        return cls.model_validate(asdict(spend))


class AnomalyCountResponse(BaseModel):
    count: int = Field(..., ge=0)


class ErrorResponse(CamelModel):
    """
    Body returned for every handled error.
    """

    status: int
    message: str
    timestamp: dt.datetime
    field_errors: dict[str, str] | None = None
