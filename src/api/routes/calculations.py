"""Calculation API Routes

Stateless previews of line and document amounts.
"""

from decimal import Decimal
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.document_request import CalculateRequestSchema, SeedLineRequestSchema
from src.app.use_cases.sales.dtos import (
    CalculateDocumentCommandDTO,
    CalculateDocumentResponseDTO,
    LineItemDTO,
    LineItemInputDTO,
    SeedLineCommandDTO,
)
from src.app.use_cases.sales.calculate_document import CalculateDocument
from src.app.use_cases.sales.seed_line_from_catalog import SeedLineFromCatalog
from src.adapter.repositories.catalog_item_repository import SqlAlchemyCatalogItemRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/sales", tags=["Calculations"])


@router.post(
    "/calculate",
    response_model=CalculateDocumentResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def calculate_document(request: CalculateRequestSchema):
    """
    Recompute every line and the document totals.

    Called on each edit of a document form. Nothing is saved.

    **Example response:**
    ```json
    {
      "lines": [
        {"position": 1, "quantity": "2", "unit_price": "100.00", "discount_percent": "10",
         "vat_percent": "15", "vat_amount": "27.00", "line_amount": "207.00"}
      ],
      "totals": {"subtotal": "200.00", "discount_total": "20.00",
                 "vat_total": "27.00", "total_amount": "207.00"}
    }
    ```
    """
    command = CalculateDocumentCommandDTO(
        lines=[
            LineItemInputDTO(
                catalog_item_id=line.catalog_item_id,
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                discount_percent=line.discount_percent,
                vat_percent=line.vat_percent,
            )
            for line in request.lines
        ],
        discount_percent=request.discount_percent,
    )

    use_case = CalculateDocument()
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/lines/from-catalog",
    response_model=LineItemDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Catalog item not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CATALOG_ITEM_NOT_FOUND",
                            "message": "Catalog item 42 not found for tenant tenant_xyz789"
                        }
                    }
                }
            }
        }
    }
)
async def seed_line_from_catalog(
    request: SeedLineRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Build a calculated line from a product or service.

    Price comes from the selling price (buying price when selling is zero, or
    when `price_type` is "buying"); VAT from the item's tax label, 15% by default.
    """
    catalog_item_repo = SqlAlchemyCatalogItemRepository(session)

    command = SeedLineCommandDTO(
        tenant_id=request.tenant_id,
        catalog_item_id=request.catalog_item_id,
        quantity=request.quantity,
        price_type=request.price_type,
    )

    use_case = SeedLineFromCatalog(
        catalog_item_repo, default_vat_percent=Decimal(str(ApplicationConfig.DEFAULT_VAT_PERCENT))
    )
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "CATALOG_ITEM_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value
