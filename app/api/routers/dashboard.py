"""
app/api/routers/dashboard.py

Read-only dashboard endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_dashboard_service
from app.schemas.expense import (
    AnomalyCountResponse,
    CategoryTotalResponse,
    ExpenseResponse,
    TopVendorResponse,
)
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/expenses/dashboard", tags=["dashboard"])


@router.get("/monthly-totals", response_model=list[CategoryTotalResponse])
def get_monthly_totals(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> list[CategoryTotalResponse]:
    return [CategoryTotalResponse.from_total(total) for total in dashboard.monthly_totals()]


@router.get("/top-vendors", response_model=list[TopVendorResponse])
def get_top_vendors(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> list[TopVendorResponse]:
    return [TopVendorResponse.from_spend(spend) for spend in dashboard.top_vendors()]


@router.get("/anomalies", response_model=list[ExpenseResponse])
def get_anomalies(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> list[ExpenseResponse]:
    return [ExpenseResponse.from_record(record) for record in dashboard.anomalies()]


@router.get("/anomalies/count", response_model=AnomalyCountResponse)
def get_anomaly_count(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> AnomalyCountResponse:
    return AnomalyCountResponse(count=dashboard.anomaly_count())
