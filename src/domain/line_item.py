"""Line Item Calculator

Derives the amounts of one quotation/invoice row from its four inputs.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from src.domain.amounts import (
    DEFAULT_VAT_PERCENT,
    HUNDRED,
    NumericInput,
    ZERO,
    parse_money,
    parse_percent,
    parse_quantity,
    round_money,
)


@dataclass(frozen=True)
class LineItem:
    """
    Raw inputs of a document line

    Domain Rules:
    - quantity and unit_price are non-negative (fractional quantities allowed)
    - discount_percent and vat_percent are within [0, 100]
    - vat_amount and line_amount are never stored here; they are always
      derived through calculate_line
    """

    quantity: Decimal = Decimal("1")
    unit_price: Decimal = ZERO
    discount_percent: Decimal = ZERO
    vat_percent: Decimal = DEFAULT_VAT_PERCENT

    @classmethod
    def parse(
        cls,
        quantity: NumericInput = 1,
        unit_price: NumericInput = 0,
        discount_percent: NumericInput = 0,
        vat_percent: Optional[NumericInput] = None,
    ) -> "LineItem":
        """Build a LineItem from raw input, clamping out-of-range values"""
        return cls(
            quantity=parse_quantity(quantity),
            unit_price=parse_money(unit_price),
            discount_percent=parse_percent(discount_percent, "discount_percent"),
            vat_percent=(
                DEFAULT_VAT_PERCENT
                if vat_percent is None
                else parse_percent(vat_percent, "vat_percent")
            ),
        )


@dataclass(frozen=True)
class LineAmounts:
    """
    Derived amounts of one line

    gross, discount_amount and net keep full precision; vat_amount and
    line_amount are rounded to 2 decimal places.
    """

    gross: Decimal
    discount_amount: Decimal
    net: Decimal
    vat_amount: Decimal
    line_amount: Decimal


def calculate_line(item: LineItem) -> LineAmounts:
    """
    Compute discount, VAT and total for one line

    Order of operations:
        gross           = quantity * unit_price
        discount_amount = gross * discount_percent / 100
        net             = gross - discount_amount
        vat_amount      = round(net * vat_percent / 100)
        line_amount     = round(net + unrounded vat)

    line_amount is rounded from the full-precision sum, so it can differ by
    0.01 from net + vat_amount.
    """
    gross = item.quantity * item.unit_price
    discount_amount = gross * item.discount_percent / HUNDRED
    net = gross - discount_amount
    vat = net * item.vat_percent / HUNDRED

    return LineAmounts(
        gross=gross,
        discount_amount=discount_amount,
        net=net,
        vat_amount=round_money(vat),
        line_amount=round_money(net + vat),
    )
