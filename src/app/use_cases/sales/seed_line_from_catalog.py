"""SeedLineFromCatalog Use Case

Builds a calculated document line from a product or service of the catalog.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.repositories.catalog_item_repository import CatalogItemRepository
from src.domain.amounts import DEFAULT_VAT_PERCENT, ZERO, parse_vat_label
from src.domain.line_item import LineItem, calculate_line
from .dtos import SeedLineCommandDTO, LineItemDTO
from .mappers import catalog_line_description

logger = logging.getLogger(__name__)


class SeedLineFromCatalog:
    """
    Use Case: Seed a document line from a catalog item

    Business Rules:
    1. unit_price is the selling price, falling back to the buying price when
       the selling price is zero; price_type="buying" selects the buying price
    2. vat_percent is read from the item's tax label ("Vat 15%" -> 15),
       defaulting to the configured rate (15) when the label has no number
    3. discount starts at 0, quantity defaults to 1
    4. The catalog is read only

    Flow:
    1. Load catalog item for the tenant
    2. Resolve price and VAT rate
    3. Calculate the line
    """

    def __init__(
        self,
        catalog_item_repo: CatalogItemRepository,
        default_vat_percent: Decimal = DEFAULT_VAT_PERCENT,
    ):
        self.catalog_item_repo = catalog_item_repo
        self.default_vat_percent = default_vat_percent

    async def execute(self, command: SeedLineCommandDTO) -> Result[LineItemDTO]:
        # Step 1: Load catalog item
        item = await self.catalog_item_repo.get_by_id(command.tenant_id, command.catalog_item_id)
        if not item:
            return Return.err(
                Error(
                    code="CATALOG_ITEM_NOT_FOUND",
                    message=f"Catalog item {command.catalog_item_id} not found for tenant {command.tenant_id}",
                )
            )

        # Step 2: Resolve price and VAT rate
        if command.price_type == "buying":
            price = item.buying_price
        else:
            price = item.selling_price if item.selling_price and item.selling_price > ZERO else item.buying_price

        vat_percent = parse_vat_label(item.tax, self.default_vat_percent)
        logger.debug(f"Catalog item {item.id} tax label {item.tax!r} -> VAT {vat_percent}%")

        # Step 3: Calculate the line
        line = LineItem.parse(
            quantity=command.quantity,
            unit_price=price or ZERO,
            discount_percent=ZERO,
            vat_percent=vat_percent,
        )
        calculated = calculate_line(line)

        return Return.ok(
            LineItemDTO(
                position=1,
                catalog_item_id=item.id,
                description=catalog_line_description(item),
                quantity=line.quantity,
                unit_price=line.unit_price,
                discount_percent=line.discount_percent,
                vat_percent=line.vat_percent,
                vat_amount=calculated.vat_amount,
                line_amount=calculated.line_amount,
            )
        )
