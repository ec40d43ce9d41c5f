"""Tests for spreadsheet date normalization."""

from decimal import Decimal

import pytest

from utils.date_normalizer import DateNormalizer


class TestDayMonthYear:
    """Tests for the DD-Mon-YY format."""

    @pytest.mark.parametrize("raw,expected", [
        ("15-Jan-24", "2024-01-15"),
        ("1-Mar-99", "1999-03-01"),
        ("29-Feb-24", "2024-02-29"),
        ("05-dec-2023", "2023-12-05"),
    ])
    def test_valid_dates(self, raw: str, expected: str) -> None:
        assert DateNormalizer.normalize(raw) == expected

    def test_impossible_day_is_rejected(self) -> None:
        assert DateNormalizer.normalize("30-Feb-24") is None

    def test_surrounding_whitespace(self) -> None:
        assert DateNormalizer.normalize("  15-Jan-24 ") == "2024-01-15"


class TestSerialNumbers:
    """Tests for spreadsheet serial day numbers."""

    def test_serial_one_is_first_of_1900(self) -> None:
        assert DateNormalizer.normalize(1) == "1900-01-01"

    def test_modern_serial(self) -> None:
        result = DateNormalizer.normalize(45000)

        assert result == "2023-03-15"
        assert int(result[:4]) > 2000

    def test_fractional_serial_ignores_time(self) -> None:
        assert DateNormalizer.normalize(45000.75) == "2023-03-15"

    def test_phantom_leap_day(self) -> None:
        assert DateNormalizer.normalize(59) == "1900-02-28"
        assert DateNormalizer.normalize(60) is None
        assert DateNormalizer.normalize(61) == "1900-03-01"

    @pytest.mark.parametrize("serial", [-5, 0, 60000, 99999])
    def test_out_of_range(self, serial: int) -> None:
        assert DateNormalizer.normalize(serial) is None

    def test_nan(self) -> None:
        assert DateNormalizer.normalize(float("nan")) is None

    def test_decimal_serial(self) -> None:
        assert DateNormalizer.normalize(Decimal("45000")) == "2023-03-15"
        assert DateNormalizer.normalize(Decimal("NaN")) is None


class TestTextFormats:
    """Tests for ISO, US and free-form strings."""

    @pytest.mark.parametrize("raw,expected", [
        ("2024-01-15", "2024-01-15"),
        ("2024/01/15", "2024-01-15"),
        ("1/15/2024", "2024-01-15"),
        ("01-15-2024", "2024-01-15"),
        ("March 3, 2024", "2024-03-03"),
    ])
    def test_recognised(self, raw: str, expected: str) -> None:
        assert DateNormalizer.normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "not a date", "13/45/2024", "Monday", "10:30", "12"])
    def test_unrecognised(self, raw: str) -> None:
        assert DateNormalizer.normalize(raw) is None

    def test_none_and_bool(self) -> None:
        assert DateNormalizer.normalize(None) is None
        assert DateNormalizer.normalize(True) is None
