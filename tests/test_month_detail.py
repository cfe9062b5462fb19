"""Tests for the single-month breakdown."""
import io
import unittest
from datetime import datetime
from decimal import Decimal

from smskpi.kpi.models import MonthKey
from smskpi.kpi.month_detail import compute_month_detail

from sample_data import SAMPLE_CSV, make_csv


class TestMonthDetail(unittest.TestCase):
    """Test compute_month_detail."""

    def test_sample_january(self):
        detail = compute_month_detail(io.StringIO(SAMPLE_CSV), "2026-01")

        self.assertEqual(detail.month, MonthKey(2026, 1))
        self.assertEqual(detail.total, Decimal("150.00"))
        self.assertEqual(detail.label_totals, {"Food": Decimal("150.00")})
        self.assertEqual(
            [t.timestamp for t in detail.transactions],
            [datetime(2026, 1, 4, 12, 0), datetime(2026, 1, 4, 10, 0)]
        )

    def test_income_excluded_from_month(self):
        detail = compute_month_detail(io.StringIO(SAMPLE_CSV), MonthKey(2026, 2))
        self.assertEqual(detail.total, Decimal("30.00"))
        self.assertEqual(detail.label_totals, {"Transport": Decimal("30.00")})
        self.assertEqual(len(detail.transactions), 1)

    def test_month_without_transactions(self):
        detail = compute_month_detail(io.StringIO(SAMPLE_CSV), "2025-07")
        self.assertEqual(detail.total, Decimal("0"))
        self.assertEqual(detail.label_totals, {})
        self.assertEqual(detail.transactions, [])

    def test_same_month_other_year_excluded(self):
        csv_text = make_csv(
            "BankX,04-01-2025 10:00,500.00,OK,Food,Old",
            "BankX,04-01-2026 10:00,5.00,OK,Food,New",
        )
        detail = compute_month_detail(io.StringIO(csv_text), "2026-01")
        self.assertEqual(detail.total, Decimal("5.00"))

    def test_per_label_sums(self):
        csv_text = make_csv(
            "BankX,01-03-2026 08:00,10.00,OK,Food,a",
            "BankX,02-03-2026 08:00,5.00,OK,,b",
            "BankX,03-03-2026 08:00,2.50,OK,Food,c",
            "BankX,03-03-2026 09:00,oops,OK,Food,d",
        )
        detail = compute_month_detail(io.StringIO(csv_text), "2026-03")
        self.assertEqual(detail.label_totals, {"Food": Decimal("12.50"), "": Decimal("5.00")})
        self.assertEqual(detail.transactions[0].timestamp, datetime(2026, 3, 3, 8, 0))
        self.assertEqual(detail.discarded_count, 1)

    def test_bad_month_string(self):
        with self.assertRaises(ValueError):
            compute_month_detail(io.StringIO(SAMPLE_CSV), "January 2026")


class TestMonthKey(unittest.TestCase):
    """Test MonthKey parsing and ordering."""

    def test_parse_and_str(self):
        self.assertEqual(str(MonthKey.parse("2026-01")), "2026-01")

    def test_invalid_month(self):
        with self.assertRaises(ValueError):
            MonthKey.parse("2026-13")

    def test_ordering(self):
        self.assertLess(MonthKey(2025, 12), MonthKey(2026, 1))


if __name__ == "__main__":
    unittest.main()
