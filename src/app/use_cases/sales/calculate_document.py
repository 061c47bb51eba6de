"""CalculateDocument Use Case

Recomputes every line and the document totals from raw line inputs.
Called on each edit of a quotation, proforma or tax invoice form.
"""

from decimal import Decimal
from typing import List
from libs.result import Result, Return, Error
from src.domain.amounts import AmountValidationError, parse_percent
from src.domain.document_totals import DocumentTotals, aggregate_totals
from src.domain.line_item import LineItem, calculate_line
from .dtos import (
    CalculateDocumentCommandDTO,
    CalculateDocumentResponseDTO,
    LineItemDTO,
    LineItemInputDTO,
)
from .mappers import to_totals_dto


def build_lines(
    inputs: List[LineItemInputDTO], discount_percent: Decimal = Decimal("0")
) -> tuple[List[LineItemDTO], DocumentTotals]:
    """
    Run the line calculator over every input and fold the results

    Out-of-range inputs are clamped; positions follow input order starting at 1.

    Raises:
        AmountValidationError: If an input is not numeric
    """
    lines = []
    amounts = []

    for position, line_input in enumerate(inputs, start=1):
        item = LineItem.parse(
            quantity=line_input.quantity,
            unit_price=line_input.unit_price,
            discount_percent=line_input.discount_percent,
            vat_percent=line_input.vat_percent,
        )
        calculated = calculate_line(item)
        amounts.append(calculated)
        lines.append(
            LineItemDTO(
                position=position,
                catalog_item_id=line_input.catalog_item_id,
                description=line_input.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                discount_percent=item.discount_percent,
                vat_percent=item.vat_percent,
                vat_amount=calculated.vat_amount,
                line_amount=calculated.line_amount,
            )
        )

    totals = aggregate_totals(amounts, parse_percent(discount_percent, "discount_percent"))
    return lines, totals


class CalculateDocument:
    """
    Use Case: Preview document amounts

    Business Rules:
    1. vat_amount and line_amount are always derived, never taken from input
    2. Totals are a full refold of all lines (sum then round)
    3. An empty document totals to 0.00 everywhere
    4. Nothing is persisted

    Flow:
    1. Calculate each line
    2. Aggregate totals
    3. Return lines and totals
    """

    async def execute(
        self, command: CalculateDocumentCommandDTO
    ) -> Result[CalculateDocumentResponseDTO]:
        try:
            lines, totals = build_lines(command.lines, command.discount_percent)
        except AmountValidationError as e:
            return Return.err(
                Error(
                    code="INVALID_AMOUNT",
                    message=str(e),
                    reason=e.field,
                )
            )

        return Return.ok(
            CalculateDocumentResponseDTO(lines=lines, totals=to_totals_dto(totals))
        )
