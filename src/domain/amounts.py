"""Numeric input parsing for line items

Single entry point for turning raw user input into Decimal values.
Non-numeric input is rejected with AmountValidationError instead of being
coerced to zero; numeric input outside the valid range is clamped to the
nearest bound. Parsed values are rounded to the scale they are stored
with (6 places for quantities and prices, 2 for percentages) before any
calculation, so a stored line always recomputes to its stored amounts.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

NumericInput = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")
QUANTITY_STEP = Decimal("0.000001")
PERCENT_STEP = CENT
DEFAULT_VAT_PERCENT = Decimal("15")

_LEADING_NUMBER = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)")
_NON_NUMERIC = re.compile(r"[^0-9.]")


class AmountValidationError(ValueError):
    """Raised when a numeric field receives a non-numeric value"""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be numeric, got {value!r}")


def round_money(value: Decimal) -> Decimal:
    """Round a monetary value to 2 decimal places, half up"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value: NumericInput, field: str = "value") -> Decimal:
    """Convert raw input to a finite Decimal or raise AmountValidationError"""
    if isinstance(value, bool) or value is None:
        raise AmountValidationError(field, value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the short repr (0.1 -> "0.1") instead of the binary expansion
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            raise AmountValidationError(field, value)
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise AmountValidationError(field, value)
    else:
        raise AmountValidationError(field, value)

    if not result.is_finite():
        raise AmountValidationError(field, value)
    return result


def _to_scale(value: Decimal, step: Decimal, field: str, raw) -> Decimal:
    try:
        return value.quantize(step, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # too many digits for the working precision
        raise AmountValidationError(field, raw)


def _clamp(value: Decimal, lower: Decimal, upper: Optional[Decimal] = None) -> Decimal:
    if value < lower:
        return lower
    if upper is not None and value > upper:
        return upper
    return value


def parse_money(value: NumericInput, field: str = "unit_price") -> Decimal:
    """Parse a non-negative currency amount"""
    return _to_scale(_clamp(to_decimal(value, field), ZERO), QUANTITY_STEP, field, value)


def parse_quantity(value: NumericInput, field: str = "quantity") -> Decimal:
    """Parse a non-negative, possibly fractional, quantity"""
    return _to_scale(_clamp(to_decimal(value, field), ZERO), QUANTITY_STEP, field, value)


def parse_percent(value: NumericInput, field: str = "percent") -> Decimal:
    """Parse a percentage clamped to [0, 100]"""
    return _to_scale(_clamp(to_decimal(value, field), ZERO, HUNDRED), PERCENT_STEP, field, value)


def parse_vat_label(label: Optional[str], default: Decimal = DEFAULT_VAT_PERCENT) -> Decimal:
    """
    Extract the VAT rate from a catalog tax label

    Every character other than digits and dots is stripped, then the leading
    number is read: "Vat 15%" -> 15, "VAT 5%" -> 5, "Vat 15.5%" -> 15.5.
    Labels without a usable number ("No Tax", "", None) yield the default.

    Args:
        label: Tax label as stored on the catalog item
        default: Rate used when the label carries no number

    Returns:
        VAT percentage clamped to [0, 100]
    """
    if not label:
        return default

    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", label))
    if not match:
        return default

    return _clamp(Decimal(match.group(1)), ZERO, HUNDRED).quantize(PERCENT_STEP, rounding=ROUND_HALF_UP)
