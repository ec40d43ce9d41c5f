"""Tests for entity models and spreadsheet cell typing."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from core.models.entities import Cell, CellKind, Loan, LoanStatus, Payment


class TestCell:
    """Tests for Cell.from_raw."""

    @pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
    def test_empty_values(self, raw) -> None:
        cell = Cell.from_raw(raw)

        assert cell.kind == CellKind.EMPTY
        assert cell.is_empty

    def test_integer_number(self) -> None:
        cell = Cell.from_raw(45000)

        assert cell.kind == CellKind.NUMBER
        assert cell.number == 45000.0
        assert cell.text == "45000"
        assert cell.value == 45000.0

    def test_whole_float_keeps_integer_text(self) -> None:
        assert Cell.from_raw(1500.0).text == "1500"

    def test_numeric_text_is_number(self) -> None:
        cell = Cell.from_raw(" 2500.50 ")

        assert cell.kind == CellKind.NUMBER
        assert cell.number == 2500.5
        assert cell.text == "2500.50"

    def test_leading_zeros_survive_in_text(self) -> None:
        assert Cell.from_raw("00123").text == "00123"

    def test_plain_text(self) -> None:
        cell = Cell.from_raw("  Alice  ")

        assert cell.kind == CellKind.TEXT
        assert cell.value == "Alice"

    def test_dates_become_iso_text(self) -> None:
        assert Cell.from_raw(datetime(2024, 1, 15, 10, 30)).text == "2024-01-15"
        assert Cell.from_raw(date(2024, 1, 15)).text == "2024-01-15"

    def test_bool_is_text(self) -> None:
        assert Cell.from_raw(True).kind == CellKind.TEXT

    def test_infinity_text_stays_text(self) -> None:
        assert Cell.from_raw("Infinity").kind == CellKind.TEXT


class TestLoan:
    """Tests for Loan derived figures."""

    def test_totals(self) -> None:
        loan = Loan(
            id="l1",
            original_amount=Decimal("5000"),
            outstanding_balance=Decimal("2000"),
            payment_history=[Payment(Decimal("1000"), "2024-01-01"), Payment(Decimal("2000"), "2024-02-01")],
        )

        assert loan.total_repaid == Decimal("3000")
        assert loan.principal_repaid == Decimal("3000")

    def test_flags(self) -> None:
        loan = Loan(id="l1", status=LoanStatus.PAID_OFF)

        assert loan.is_paid_off
        assert loan.is_unassigned
