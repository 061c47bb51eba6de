"""Unit tests for numeric input parsing"""

import pytest
from decimal import Decimal
from src.domain.amounts import (
    AmountValidationError,
    parse_money,
    parse_percent,
    parse_quantity,
    parse_vat_label,
    round_money,
    to_decimal,
)


class TestToDecimal:
    """Test raw input conversion"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("125.50", Decimal("125.50")),
            (" 3 ", Decimal("3")),
            ("1,250.75", Decimal("1250.75")),
            (2, Decimal("2")),
            (0.1, Decimal("0.1")),
            (Decimal("7.125"), Decimal("7.125")),
        ],
    )
    def test_accepts_numeric_input(self, raw, expected):
        assert to_decimal(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "   ", "12abc", None, True, "NaN", "Infinity", [1]])
    def test_rejects_non_numeric_input(self, raw):
        """Non-numeric input is an error, never silently zero"""
        with pytest.raises(AmountValidationError):
            to_decimal(raw, "unit_price")

    def test_error_names_the_field(self):
        with pytest.raises(AmountValidationError) as exc_info:
            to_decimal("abc", "quantity")

        assert exc_info.value.field == "quantity"
        assert "quantity" in str(exc_info.value)

    def test_validation_error_is_value_error(self):
        """Lets pydantic validators turn it into a 422"""
        assert issubclass(AmountValidationError, ValueError)


class TestClamping:
    """Test out-of-range values are clamped to the nearest bound"""

    def test_negative_quantity_clamped_to_zero(self):
        assert parse_quantity("-2") == Decimal("0")

    def test_fractional_quantity_kept(self):
        assert parse_quantity("2.5") == Decimal("2.5")

    def test_negative_price_clamped_to_zero(self):
        assert parse_money(-10) == Decimal("0")

    def test_percent_above_hundred_clamped(self):
        assert parse_percent("150") == Decimal("100")

    def test_negative_percent_clamped(self):
        assert parse_percent("-5") == Decimal("0")

    def test_percent_in_range_unchanged(self):
        assert parse_percent("12.5") == Decimal("12.5")


class TestStorageScale:
    """Test parsed values are rounded to the scale they are stored with"""

    def test_percent_rounded_to_two_places(self):
        assert parse_percent("12.345") == Decimal("12.35")

    def test_quantity_rounded_to_six_places(self):
        assert parse_quantity("0.0000005") == Decimal("0.000001")

    def test_price_rounded_to_six_places(self):
        assert parse_money("10.1234564") == Decimal("10.123456")

    def test_value_too_large_for_precision_rejected(self):
        with pytest.raises(AmountValidationError):
            parse_money("1e40")


class TestRoundMoney:
    """Test half-up rounding to 2 places"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("56.475", "56.48"),
            ("432.975", "432.98"),
            ("0.005", "0.01"),
            ("0.004", "0.00"),
            ("10", "10.00"),
        ],
    )
    def test_round_half_up(self, value, expected):
        assert round_money(Decimal(value)) == Decimal(expected)


class TestParseVatLabel:
    """Test VAT rate extraction from catalog tax labels"""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Vat 15%", Decimal("15")),
            ("VAT 5%", Decimal("5")),
            ("Vat 15.5%", Decimal("15.5")),
            ("0%", Decimal("0")),
            ("15", Decimal("15")),
        ],
    )
    def test_extracts_leading_number(self, label, expected):
        assert parse_vat_label(label) == expected

    @pytest.mark.parametrize("label", [None, "", "No Tax", "Exempt"])
    def test_defaults_to_fifteen_without_number(self, label):
        assert parse_vat_label(label) == Decimal("15")

    def test_custom_default(self):
        assert parse_vat_label("Exempt", default=Decimal("5")) == Decimal("5")

    def test_rate_above_hundred_clamped(self):
        assert parse_vat_label("Vat 250%") == Decimal("100")
