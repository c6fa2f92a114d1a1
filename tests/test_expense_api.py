"""
tests/test_expense_api.py

HTTP contract tests for the expense and dashboard endpoints.

Database-backed dependencies are overridden with in-memory fakes.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_dashboard_service, get_expense_ingestion_service
from app.domain.expense import CategoryTotal, ExpenseRecord, VendorSpend
from app.main import app
from app.services.csv_batch_service import CSVBatchService, get_csv_batch_service
from app.services.dashboard_service import DashboardService
from app.services.expense_ingestion_service import ExpenseIngestionService
from fakes import InMemoryExpenseStore


class StubDashboardRepository:
    def find_monthly_totals(self) -> list[CategoryTotal]:
        return [CategoryTotal(year=2024, month=3, category="Shopping", total=Decimal("250.00"))]

    def find_top_vendors(self, limit: int) -> list[VendorSpend]:
        return [VendorSpend(vendor_name="Amazon", total_spend=Decimal("250.00"))]

    def find_anomalies(self) -> list[ExpenseRecord]:
        return [
            ExpenseRecord(
                id=uuid.uuid4(),
                date=date(2024, 3, 20),
                amount=Decimal("900.00"),
                vendor_name="Amazon",
                description=None,
                category="Shopping",
                is_anomaly=True,
                created_at=datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc),
            )
        ]

    def count_anomalies(self) -> int:
        return 1


@pytest.fixture()
def client(ingestion_service: ExpenseIngestionService):
    dashboard_repository = StubDashboardRepository()
    app.dependency_overrides[get_expense_ingestion_service] = lambda: ingestion_service
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(
        expenses=dashboard_repository,  # type: ignore[arg-type]
        top_vendor_limit=5,
    )
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestAddExpense:
    def test_creates_classified_expense(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/expenses",
            json={"date": "2024-03-15", "amount": 120.5, "vendorName": " AMAZON ", "description": "Books"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["category"] == "Shopping"
        assert body["isAnomaly"] is False
        assert body["vendorName"] == "AMAZON"
        assert body["date"] == "2024-03-15"
        assert "id" in body and "createdAt" in body

    def test_accepts_snake_case_fields(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/expenses",
            json={"date": "2024-03-15", "amount": "10", "vendor_name": "Corner Bakery"},
        )

        assert response.status_code == 201
        assert response.json()["category"] == "Others"

    def test_description_is_trimmed_like_csv_rows(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/expenses",
            json={"date": "2024-03-15", "amount": "10", "vendorName": "Uber", "description": "  airport run  "},
        )

        assert response.status_code == 201
        assert response.json()["description"] == "airport run"

    def test_flags_anomaly_against_previous_entries(self, client: TestClient) -> None:
        for amount in ("100", "100"):
            client.post("/api/v1/expenses", json={"date": "2024-03-15", "amount": amount, "vendorName": "Uber"})

        response = client.post(
            "/api/v1/expenses", json={"date": "2024-03-16", "amount": "1000", "vendorName": "Uber"}
        )

        assert response.json()["isAnomaly"] is True

    def test_validation_errors_are_field_message_pairs(
        self, client: TestClient, expense_store: InMemoryExpenseStore
    ) -> None:
        response = client.post(
            "/api/v1/expenses",
            json={"date": "2024-03-15", "amount": "-5", "vendorName": "   "},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert body["message"] == "Validation failed"
        assert body["fieldErrors"]["amount"] == "Amount must be greater than 0"
        assert body["fieldErrors"]["vendorName"] == "Vendor name is required"
        assert expense_store.records == []

    def test_missing_fields_are_reported(self, client: TestClient) -> None:
        response = client.post("/api/v1/expenses", json={"amount": "5"})

        assert response.status_code == 400
        assert set(response.json()["fieldErrors"]) == {"date", "vendorName"}

    def test_persistence_failure_returns_500(
        self, client: TestClient, expense_store: InMemoryExpenseStore
    ) -> None:
        expense_store.fail_on_vendors.add("Amazon")

        response = client.post(
            "/api/v1/expenses", json={"date": "2024-03-15", "amount": "10", "vendorName": "Amazon"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Unable to save expense."

    def test_store_unavailable_returns_503(
        self, client: TestClient, expense_store: InMemoryExpenseStore
    ) -> None:
        expense_store.unavailable_on_vendors.add("Amazon")

        response = client.post(
            "/api/v1/expenses", json={"date": "2024-03-15", "amount": "10", "vendorName": "Amazon"}
        )

        assert response.status_code == 503


class TestUploadCSV:
    def _upload(self, client: TestClient, content: bytes, filename: str = "expenses.csv"):
        return client.post(
            "/api/v1/expenses/upload-csv",
            files={"file": (filename, content, "text/csv")},
        )

    def test_reports_partial_success(self, client: TestClient) -> None:
        content = (
            b"date,amount,vendor,description\n"
            b"2024-01-01,100,Swiggy,lunch\n"
            b"2024-01-02,100,Swiggy,lunch\n"
            b"2024-01-03,abc,Swiggy,oops\n"
            b"2024-01-04,1000,Swiggy,party\n"
        )

        response = self._upload(client, content)

        assert response.status_code == 200
        body = response.json()
        assert body["totalRows"] == 4
        assert body["successCount"] == 3
        assert body["failureCount"] == 1
        assert body["errors"] == ["Row 4: Invalid amount 'abc'."]
        assert [expense["isAnomaly"] for expense in body["savedExpenses"]] == [False, False, True]
        assert {expense["category"] for expense in body["savedExpenses"]} == {"Food & Dining"}

    def test_empty_file_is_rejected(self, client: TestClient) -> None:
        response = self._upload(client, b"")

        assert response.status_code == 400
        assert response.json()["message"] == "Uploaded CSV file is empty."

    def test_malformed_file_is_rejected(self, client: TestClient) -> None:
        response = self._upload(client, b'2024-01-01,"10"x,Uber,ride\n')

        assert response.status_code == 400
        assert response.json()["message"].startswith("Failed to parse CSV file")

    def test_oversized_file_is_rejected_before_any_row(
        self, client: TestClient, expense_store: InMemoryExpenseStore
    ) -> None:
        app.dependency_overrides[get_csv_batch_service] = lambda: CSVBatchService(max_upload_bytes=32)
        content = b"2024-01-01,10,Uber,ride\n" * 100

        response = self._upload(client, content)

        assert response.status_code == 400
        assert "exceeds the maximum allowed size" in response.json()["message"]
        assert expense_store.records == []

    def test_non_csv_upload_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/expenses/upload-csv",
            files={"file": ("expenses.json", b"{}", "application/json")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only CSV files are allowed."


class TestDashboard:
    def test_monthly_totals(self, client: TestClient) -> None:
        response = client.get("/api/v1/expenses/dashboard/monthly-totals")

        assert response.status_code == 200
        [total] = response.json()
        assert (total["year"], total["month"], total["category"]) == (2024, 3, "Shopping")
        assert Decimal(str(total["total"])) == Decimal("250.00")

    def test_top_vendors(self, client: TestClient) -> None:
        response = client.get("/api/v1/expenses/dashboard/top-vendors")

        [vendor] = response.json()
        assert vendor["vendorName"] == "Amazon"
        assert Decimal(str(vendor["totalSpend"])) == Decimal("250.00")

    def test_anomalies(self, client: TestClient) -> None:
        response = client.get("/api/v1/expenses/dashboard/anomalies")

        [anomaly] = response.json()
        assert anomaly["isAnomaly"] is True
        assert anomaly["date"] == "2024-03-20"

    def test_anomaly_count(self, client: TestClient) -> None:
        response = client.get("/api/v1/expenses/dashboard/anomalies/count")

        assert response.json() == {"count": 1}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
