"""Entity to DTO conversion shared by the sales document use cases"""

from typing import List, Optional
from src.domain.catalog_item import CatalogItem
from src.domain.customer import Customer
from src.domain.document import SalesDocument
from src.domain.document_line import DocumentLine
from src.domain.document_totals import DocumentTotals
from .dtos import (
    CustomerSummaryDTO,
    DocumentResponseDTO,
    DocumentSummaryDTO,
    DocumentTotalsDTO,
    LineItemDTO,
)


def to_line_dto(line: DocumentLine) -> LineItemDTO:
    return LineItemDTO(
        position=line.position,
        catalog_item_id=line.catalog_item_id,
        description=line.description,
        quantity=line.quantity,
        unit_price=line.unit_price,
        discount_percent=line.discount_percent,
        vat_percent=line.vat_percent,
        vat_amount=line.vat_amount,
        line_amount=line.line_amount,
    )


def to_totals_dto(totals: DocumentTotals) -> DocumentTotalsDTO:
    return DocumentTotalsDTO(
        subtotal=totals.subtotal,
        discount_total=totals.discount_total,
        vat_total=totals.vat_total,
        total_amount=totals.total_amount,
    )


def to_customer_dto(customer: Optional[Customer]) -> Optional[CustomerSummaryDTO]:
    if customer is None:
        return None
    return CustomerSummaryDTO(
        customer_id=customer.id,
        customer_name=customer.customer_name,
        phone=customer.phone,
        email=customer.email,
        address=customer.address or None,
        vat_registration_number=customer.vat_registration_number,
    )


def to_document_dto(
    document: SalesDocument,
    lines: List[DocumentLine],
    customer: Optional[Customer] = None,
) -> DocumentResponseDTO:
    """Build the full document response from the entity, its lines and customer"""
    return DocumentResponseDTO(
        document_id=document.id,
        tenant_id=document.tenant_id,
        document_type=document.document_type,
        reference_id=document.reference_id,
        customer_id=document.customer_id,
        customer=to_customer_dto(customer),
        description=document.description,
        issue_date=document.issue_date,
        due_date=document.due_date,
        supply_date=document.supply_date,
        payment_term=document.payment_term,
        cost_center=document.cost_center,
        currency=document.currency,
        discount_percent=document.discount_percent,
        subtotal=document.subtotal,
        discount_total=document.discount_total,
        vat_total=document.vat_total,
        total_amount=document.total_amount,
        status=document.status,
        terms_and_conditions=document.terms_and_conditions,
        notes=document.notes,
        qr_code=document.qr_code,
        lines=[to_line_dto(line) for line in lines],
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def to_summary_dto(document: SalesDocument) -> DocumentSummaryDTO:
    return DocumentSummaryDTO(
        document_id=document.id,
        reference_id=document.reference_id,
        customer_id=document.customer_id,
        issue_date=document.issue_date,
        due_date=document.due_date,
        total_amount=document.total_amount,
        status=document.status,
        created_at=document.created_at,
    )


def catalog_line_description(item: CatalogItem) -> str:
    if item.description:
        return f"{item.display_name} - {item.description}"
    return item.display_name
