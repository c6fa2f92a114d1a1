from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from app.validators.expense_row_validator import ExpenseRowParser, RowParseError


class TestExpenseRowParser(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = ExpenseRowParser()

    def assertRowError(self, fields: list[str], expected_reason: str, row_number: int = 2) -> None:
        with self.assertRaises(RowParseError) as ctx:
            self.parser.parse_row(fields, row_number)
        self.assertEqual(ctx.exception.reason, expected_reason)
        self.assertEqual(ctx.exception.row_number, row_number)

    def test_parses_valid_row(self) -> None:
        candidate = self.parser.parse_row(["2024-03-15", "249.50", "Amazon", "Headphones"], 2)

        self.assertEqual(candidate.date, date(2024, 3, 15))
        self.assertEqual(candidate.amount, Decimal("249.50"))
        self.assertEqual(candidate.vendor_name, "Amazon")
        self.assertEqual(candidate.description, "Headphones")

    def test_trims_every_field(self) -> None:
        candidate = self.parser.parse_row([" 2024-03-15 ", " 10 ", "  Uber ", "  ride home  "], 2)

        self.assertEqual(candidate.amount, Decimal("10"))
        self.assertEqual(candidate.vendor_name, "Uber")
        self.assertEqual(candidate.description, "ride home")

    def test_empty_description_is_kept_empty(self) -> None:
        candidate = self.parser.parse_row(["2024-03-15", "10", "Uber", ""], 2)
        self.assertEqual(candidate.description, "")

    def test_extra_columns_are_ignored(self) -> None:
        candidate = self.parser.parse_row(["2024-03-15", "10", "Uber", "ride", "extra"], 2)
        self.assertEqual(candidate.description, "ride")

    def test_rejects_missing_columns(self) -> None:
        self.assertRowError(["2024-03-15", "10", "Uber"], "Expected 4 columns but found 3.")
        self.assertRowError([], "Expected 4 columns but found 0.")

    def test_rejects_malformed_dates(self) -> None:
        for raw in ("15-03-2024", "2024/03/15", "2024-3-15", "2024-02-30", "yesterday", ""):
            with self.subTest(raw=raw):
                self.assertRowError(
                    [raw, "10", "Uber", ""],
                    f"Invalid date format '{raw}'. Expected yyyy-MM-dd.",
                )

    def test_rejects_non_numeric_amounts(self) -> None:
        for raw in ("ten", "", "12,50", "NaN", "Infinity", "1_000", "$10"):
            with self.subTest(raw=raw):
                self.assertRowError(["2024-03-15", raw, "Uber", ""], f"Invalid amount '{raw}'.")

    def test_rejects_non_positive_amounts(self) -> None:
        for raw in ("0", "0.00", "-5", "-0.01"):
            with self.subTest(raw=raw):
                self.assertRowError(["2024-03-15", raw, "Uber", ""], "Amount must be greater than 0.")

    def test_rejects_amounts_beyond_storage_precision(self) -> None:
        for raw in ("10.001", "12345678901234"):
            with self.subTest(raw=raw):
                self.assertRowError(
                    ["2024-03-15", raw, "Uber", ""], f"Invalid amount format '{raw}'."
                )

    def test_accepts_amount_edge_formats(self) -> None:
        for raw, expected in (("1e3", Decimal("1000")), ("10.500", Decimal("10.5")), ("9999999999999.99", Decimal("9999999999999.99"))):
            with self.subTest(raw=raw):
                candidate = self.parser.parse_row(["2024-03-15", raw, "Uber", ""], 2)
                self.assertEqual(candidate.amount, expected)

    def test_rejects_blank_vendor(self) -> None:
        self.assertRowError(["2024-03-15", "10", "   ", ""], "Vendor name must not be blank.")

    def test_rejects_long_vendor_and_description(self) -> None:
        self.assertRowError(
            ["2024-03-15", "10", "V" * 256, ""], "Vendor name must not exceed 255 characters."
        )
        self.assertRowError(
            ["2024-03-15", "10", "Uber", "d" * 1001], "Description must not exceed 1000 characters."
        )

    def test_date_is_checked_before_amount(self) -> None:
        self.assertRowError(["bad", "bad", "", ""], "Invalid date format 'bad'. Expected yyyy-MM-dd.")


class TestHeaderDetection(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = ExpenseRowParser()

    def test_detects_header_in_any_case(self) -> None:
        for cell in ("date", "Date", "DATE", "  date  ", '"date"', ' "Date" '):
            with self.subTest(cell=cell):
                self.assertTrue(self.parser.is_header_row([[cell, "amount", "vendor", "description"]]))

    def test_data_row_is_not_a_header(self) -> None:
        self.assertFalse(self.parser.is_header_row([["2024-03-15", "10", "Uber", ""]]))
        self.assertFalse(self.parser.is_header_row([["dates", "amount", "vendor", "description"]]))

    def test_empty_input_has_no_header(self) -> None:
        self.assertFalse(self.parser.is_header_row([]))
        self.assertFalse(self.parser.is_header_row([[]]))


if __name__ == "__main__":
    unittest.main()
