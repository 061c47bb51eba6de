"""Document Aggregator

Folds the lines of a quotation, proforma or tax invoice into its totals.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable
from src.domain.amounts import HUNDRED, ZERO, round_money
from src.domain.line_item import LineAmounts


@dataclass(frozen=True)
class DocumentTotals:
    """Document-level totals, each rounded to 2 decimal places"""

    subtotal: Decimal
    discount_total: Decimal
    vat_total: Decimal
    total_amount: Decimal

    @classmethod
    def empty(cls) -> "DocumentTotals":
        zero = round_money(ZERO)
        return cls(subtotal=zero, discount_total=zero, vat_total=zero, total_amount=zero)


def aggregate_totals(
    lines: Iterable[LineAmounts], discount_percent: Decimal = ZERO
) -> DocumentTotals:
    """
    Sum line amounts into document totals

    subtotal is the pre-discount, pre-VAT sum of gross amounts. Each total is
    summed first and rounded once. A non-zero document-level discount_percent
    takes subtotal * discount_percent / 100 off the total and adds it to
    discount_total; VAT stays as computed per line.

    Args:
        lines: Calculated lines, in any order
        discount_percent: Optional document-level discount in [0, 100]

    Returns:
        DocumentTotals (all 0.00 for an empty sequence)
    """
    subtotal = ZERO
    discount_total = ZERO
    vat_total = ZERO
    total_amount = ZERO

    for line in lines:
        subtotal += line.gross
        discount_total += line.discount_amount
        vat_total += line.vat_amount
        total_amount += line.line_amount

    if discount_percent:
        global_discount = subtotal * discount_percent / HUNDRED
        discount_total += global_discount
        total_amount -= global_discount

    return DocumentTotals(
        subtotal=round_money(subtotal),
        discount_total=round_money(discount_total),
        vat_total=round_money(vat_total),
        total_amount=round_money(total_amount),
    )
