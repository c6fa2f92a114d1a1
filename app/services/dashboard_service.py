"""
app/services/dashboard_service.py

Read-only dashboard queries over persisted expenses.
"""

from __future__ import annotations

from app.domain.expense import CategoryTotal, ExpenseRecord, VendorSpend
from app.repositories.expense_repository import ExpenseRepository


class DashboardService:
    def __init__(self, *, expenses: ExpenseRepository, top_vendor_limit: int = 5) -> None:
        self._expenses = expenses
        self._top_vendor_limit = max(1, top_vendor_limit)

    def monthly_totals(self) -> list[CategoryTotal]:
        """Totals per (year, month, category), newest month first."""
        return self._expenses.find_monthly_totals()

    def top_vendors(self) -> list[VendorSpend]:
        return self._expenses.find_top_vendors(self._top_vendor_limit)

    def anomalies(self) -> list[ExpenseRecord]:
        """Anomalous expenses, most recent date first."""
        return self._expenses.find_anomalies()

    def anomaly_count(self) -> int:
        return self._expenses.count_anomalies()
