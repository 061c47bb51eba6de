"""Sales Document API Routes

FastAPI routes for quotations, proforma invoices and tax invoices.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.document_request import (
    DocumentRequestSchema,
    UpdateDocumentRequestSchema,
    StatusChangeRequestSchema,
)
from src.app.repositories.sales_document_repository import DocumentFilter
from src.app.use_cases.sales.dtos import (
    ChangeStatusCommandDTO,
    CreateDocumentCommandDTO,
    DocumentResponseDTO,
    LineItemInputDTO,
    ListDocumentsResponseDTO,
    NextReferenceResponseDTO,
    UpdateDocumentCommandDTO,
)
from src.app.use_cases.sales.change_document_status import ChangeDocumentStatus
from src.app.use_cases.sales.create_document import CreateDocument
from src.app.use_cases.sales.delete_document import DeleteDocument
from src.app.use_cases.sales.get_document import GetDocument
from src.app.use_cases.sales.get_next_reference import GetNextReference
from src.app.use_cases.sales.list_documents import ListDocuments
from src.app.use_cases.sales.update_document import UpdateDocument
from src.adapter.repositories.sales_document_repository import SqlAlchemySalesDocumentRepository
from src.adapter.repositories.document_line_repository import SqlAlchemyDocumentLineRepository
from src.adapter.repositories.reference_counter_repository import SqlAlchemyReferenceCounterRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.zatca_qr_code_service import ZatcaQrCodeService
from src.depends import get_session, get_qr_code_service
from src.domain.document import DocumentType
from src.api.error import ClientError

router = APIRouter(prefix="/sales/documents", tags=["Sales Documents"])

NOT_FOUND_RESPONSE = {
    "description": "Document not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "DOCUMENT_NOT_FOUND",
                    "message": "quotation 123 not found for tenant tenant_xyz789"
                }
            }
        }
    }
}


def _to_line_inputs(lines) -> list[LineItemInputDTO]:
    return [
        LineItemInputDTO(
            catalog_item_id=line.catalog_item_id,
            description=line.description,
            quantity=line.quantity,
            unit_price=line.unit_price,
            discount_percent=line.discount_percent,
            vat_percent=line.vat_percent,
        )
        for line in lines
    ]


@router.get(
    "/{document_type}/next-reference",
    response_model=NextReferenceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        503: {
            "description": "Reference could not be allocated",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "REFERENCE_ALLOCATION_FAILED",
                            "message": "Could not allocate a quotation reference"
                        }
                    }
                }
            }
        }
    }
)
async def get_next_reference(
    document_type: DocumentType,
    tenant_id: str = Query(..., min_length=1, description="Tenant identifier"),
    session: AsyncSession = Depends(get_session)
):
    """
    Allocate the next reference for a new document.

    Each call consumes a number: two calls return two different references
    (QUO00006, QUO00007). A reference that is never saved leaves a gap.

    **Path parameters:**
    - `document_type`: quotation, proforma_invoice or invoice

    **Returns:**
    - 200: Allocated reference
    - 503: Reference lookup failed (never guessed)
    """
    uow = SqlAlchemyUnitOfWork(session)
    counter_repo = SqlAlchemyReferenceCounterRepository(session)

    use_case = GetNextReference(uow, counter_repo)
    result = await use_case.execute(tenant_id, document_type)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return result.value


@router.post(
    "/{document_type}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Reference already used",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "REFERENCE_CONFLICT",
                            "message": "Reference already exists for tenant tenant_xyz789"
                        }
                    }
                }
            }
        },
        404: {
            "description": "Customer not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CUSTOMER_NOT_FOUND",
                            "message": "Customer 7 not found for tenant tenant_xyz789"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Invalid dates or reference",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_DUE_DATE",
                            "message": "Due date 2024-01-01 is before issue date 2024-01-08"
                        }
                    }
                }
            }
        },
        503: {"description": "Reference could not be allocated"},
    }
)
async def create_document(
    document_type: DocumentType,
    request: DocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
    qr_code_service: ZatcaQrCodeService = Depends(get_qr_code_service),
):
    """
    Save a new quotation, proforma invoice or tax invoice.

    Line VAT and amounts and all document totals are computed by the server.
    When `reference_id` is omitted the next reference is allocated.

    **Example request:**
    ```json
    {
      "tenant_id": "tenant_xyz789",
      "customer_id": 7,
      "issue_date": "2024-01-01",
      "due_date": "2024-01-08",
      "lines": [
        {"description": "Consulting", "quantity": "2", "unit_price": "100.00",
         "discount_percent": "10", "vat_percent": "15"}
      ]
    }
    ```

    **Returns:**
    - 201: Document created
    - 400: Due date before issue date, or malformed reference
    - 404: Customer not found
    - 409: Reference already used
    - 422: Non-numeric amount
    - 503: Reference allocation failed
    """
    uow = SqlAlchemyUnitOfWork(session)
    document_repo = SqlAlchemySalesDocumentRepository(session)
    line_repo = SqlAlchemyDocumentLineRepository(session)
    counter_repo = SqlAlchemyReferenceCounterRepository(session)
    customer_repo = SqlAlchemyCustomerRepository(session)

    command = CreateDocumentCommandDTO(
        tenant_id=request.tenant_id,
        document_type=document_type,
        reference_id=request.reference_id,
        customer_id=request.customer_id,
        description=request.description,
        issue_date=request.issue_date,
        due_date=request.due_date,
        supply_date=request.supply_date,
        payment_term=request.payment_term,
        cost_center=request.cost_center,
        currency=request.currency or ApplicationConfig.DEFAULT_CURRENCY,
        discount_percent=request.discount_percent,
        lines=_to_line_inputs(request.lines),
        terms_and_conditions=request.terms_and_conditions,
        notes=request.notes,
    )

    use_case = CreateDocument(uow, document_repo, line_repo, counter_repo, customer_repo, qr_code_service)
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "CUSTOMER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code == "REFERENCE_CONFLICT":
            raise ClientError(result.error, status_code=status.HTTP_409_CONFLICT)
        if result.error.code == "REFERENCE_ALLOCATION_FAILED":
            raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{document_type}",
    response_model=ListDocumentsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_documents(
    document_type: DocumentType,
    tenant_id: str = Query(..., min_length=1, description="Tenant identifier"),
    customer_id: Optional[int] = Query(default=None),
    document_status: Optional[str] = Query(default=None, alias="status"),
    issue_date_from: Optional[date] = Query(default=None),
    issue_date_to: Optional[date] = Query(default=None),
    due_date_from: Optional[date] = Query(default=None),
    due_date_to: Optional[date] = Query(default=None),
    min_amount: Optional[Decimal] = Query(default=None, ge=0),
    max_amount: Optional[Decimal] = Query(default=None, ge=0),
    limit: int = Query(default=20, ge=1, le=100, description="Maximum number of documents"),
    offset: int = Query(default=0, ge=0, description="Number of documents to skip"),
    session: AsyncSession = Depends(get_session)
):
    """
    List documents of a tenant, oldest first.

    **Query parameters:**
    - `tenant_id` (required)
    - `customer_id`, `status`: exact match
    - `issue_date_from` / `issue_date_to`, `due_date_from` / `due_date_to`: inclusive ranges
    - `min_amount` / `max_amount`: inclusive range on total_amount
    - `limit` (1-100, default 20), `offset` (default 0)
    """
    document_repo = SqlAlchemySalesDocumentRepository(session)

    filters = DocumentFilter(
        customer_id=customer_id,
        status=document_status,
        issue_date_from=issue_date_from,
        issue_date_to=issue_date_to,
        due_date_from=due_date_from,
        due_date_to=due_date_to,
        min_amount=min_amount,
        max_amount=max_amount,
    )

    use_case = ListDocuments(document_repo)
    result = await use_case.execute(tenant_id, document_type, filters=filters, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{document_type}/{document_id}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE}
)
async def get_document(
    document_type: DocumentType,
    document_id: int,
    tenant_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session)
):
    """
    Retrieve a document with its lines and customer display fields.

    **Returns:**
    - 200: Document found
    - 404: Document not found for this tenant and type
    """
    document_repo = SqlAlchemySalesDocumentRepository(session)
    line_repo = SqlAlchemyDocumentLineRepository(session)
    customer_repo = SqlAlchemyCustomerRepository(session)

    use_case = GetDocument(document_repo, line_repo, customer_repo)
    result = await use_case.execute(tenant_id, document_type, document_id)

    if result.is_err():
        if result.error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{document_type}/{document_id}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: NOT_FOUND_RESPONSE,
        409: {
            "description": "Document is no longer a draft",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "DOCUMENT_NOT_EDITABLE",
                            "message": "Document QUO00001 is sent; only drafts can be edited"
                        }
                    }
                }
            }
        },
    }
)
async def update_document(
    document_type: DocumentType,
    document_id: int,
    request: UpdateDocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
    qr_code_service: ZatcaQrCodeService = Depends(get_qr_code_service),
):
    """
    Replace the content of a draft document and recompute its totals.

    **Returns:**
    - 200: Document updated
    - 400: Due date before issue date
    - 404: Document or customer not found
    - 409: Document is not a draft
    """
    uow = SqlAlchemyUnitOfWork(session)
    document_repo = SqlAlchemySalesDocumentRepository(session)
    line_repo = SqlAlchemyDocumentLineRepository(session)
    customer_repo = SqlAlchemyCustomerRepository(session)

    command = UpdateDocumentCommandDTO(
        tenant_id=request.tenant_id,
        document_type=document_type,
        document_id=document_id,
        customer_id=request.customer_id,
        description=request.description,
        issue_date=request.issue_date,
        due_date=request.due_date,
        supply_date=request.supply_date,
        payment_term=request.payment_term,
        cost_center=request.cost_center,
        discount_percent=request.discount_percent,
        lines=_to_line_inputs(request.lines),
        terms_and_conditions=request.terms_and_conditions,
        notes=request.notes,
    )

    use_case = UpdateDocument(uow, document_repo, line_repo, customer_repo, qr_code_service)
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code in ("DOCUMENT_NOT_FOUND", "CUSTOMER_NOT_FOUND"):
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code == "DOCUMENT_NOT_EDITABLE":
            raise ClientError(result.error, status_code=status.HTTP_409_CONFLICT)
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{document_type}/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: NOT_FOUND_RESPONSE}
)
async def delete_document(
    document_type: DocumentType,
    document_id: int,
    tenant_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session)
):
    """
    Delete a document and all of its lines.

    **Returns:**
    - 204: Document deleted
    - 404: Document not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    document_repo = SqlAlchemySalesDocumentRepository(session)
    line_repo = SqlAlchemyDocumentLineRepository(session)

    use_case = DeleteDocument(uow, document_repo, line_repo)
    result = await use_case.execute(tenant_id, document_type, document_id)

    if result.is_err():
        if result.error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{document_type}/{document_id}/status",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: NOT_FOUND_RESPONSE,
        400: {
            "description": "Unknown status or transition not allowed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATUS_TRANSITION",
                            "message": "Cannot change QUO00001 from accepted to draft"
                        }
                    }
                }
            }
        },
    }
)
async def change_document_status(
    document_type: DocumentType,
    document_id: int,
    request: StatusChangeRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Move a document along its status lifecycle.

    - quotation / proforma_invoice: draft -> sent -> accepted | declined | expired
    - invoice: draft -> sent -> paid | not_paid | overdue; not_paid -> paid | overdue; overdue -> paid

    **Returns:**
    - 200: Status changed
    - 400: Unknown status or transition not allowed
    - 404: Document not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    document_repo = SqlAlchemySalesDocumentRepository(session)
    line_repo = SqlAlchemyDocumentLineRepository(session)
    customer_repo = SqlAlchemyCustomerRepository(session)

    command = ChangeStatusCommandDTO(
        tenant_id=request.tenant_id,
        document_type=document_type,
        document_id=document_id,
        status=request.status,
    )

    use_case = ChangeDocumentStatus(uow, document_repo, line_repo, customer_repo)
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value
