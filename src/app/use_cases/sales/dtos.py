"""Data Transfer Objects for Sales Document Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List, Literal
from pydantic import BaseModel, Field
from src.domain.document import DocumentType


class LineItemInputDTO(BaseModel):
    """
    Raw inputs of one document line

    vat_amount and line_amount are not accepted here; they are always derived.
    """

    catalog_item_id: Optional[int] = Field(
        default=None,
        description="Product or service the line was seeded from"
    )

    description: str = Field(
        default="",
        description="Line description"
    )

    quantity: Decimal = Field(
        default=Decimal("1"),
        description="Quantity (fractional allowed)"
    )

    unit_price: Decimal = Field(
        default=Decimal("0"),
        description="Price per unit"
    )

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        description="Line discount percentage [0, 100]"
    )

    vat_percent: Decimal = Field(
        default=Decimal("15"),
        description="VAT percentage [0, 100]"
    )


class LineItemDTO(BaseModel):
    """Calculated document line"""

    position: int = Field(..., description="Display order")
    catalog_item_id: Optional[int] = Field(default=None)
    description: str = Field(default="")
    quantity: Decimal = Field(...)
    unit_price: Decimal = Field(...)
    discount_percent: Decimal = Field(...)
    vat_percent: Decimal = Field(...)
    vat_amount: Decimal = Field(..., description="VAT on the discounted line value (2 dp)")
    line_amount: Decimal = Field(..., description="Discounted line value plus VAT (2 dp)")


class DocumentTotalsDTO(BaseModel):
    """Document-level totals"""

    subtotal: Decimal = Field(..., description="Sum of quantity * unit_price")
    discount_total: Decimal = Field(..., description="Sum of discounts")
    vat_total: Decimal = Field(..., description="Sum of line VAT amounts")
    total_amount: Decimal = Field(..., description="Sum of line amounts")


class CalculateDocumentCommandDTO(BaseModel):
    """
    Command DTO for previewing document amounts

    Used as input to CalculateDocument use case.
    """

    lines: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Raw line inputs in display order"
    )

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        description="Optional document-level discount percentage"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "lines": [
                    {"quantity": "2", "unit_price": "100.00", "discount_percent": "10", "vat_percent": "15"},
                    {"quantity": "1", "unit_price": "50.00", "discount_percent": "0", "vat_percent": "5"},
                ],
                "discount_percent": "0",
            }
        }


class CalculateDocumentResponseDTO(BaseModel):
    """Response DTO for CalculateDocument"""

    lines: List[LineItemDTO] = Field(default_factory=list)
    totals: DocumentTotalsDTO = Field(...)


class SeedLineCommandDTO(BaseModel):
    """
    Command DTO for seeding a line from a catalog item

    Used as input to SeedLineFromCatalog use case.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    catalog_item_id: int = Field(..., description="Catalog item ID")
    quantity: Decimal = Field(default=Decimal("1"), description="Initial quantity")
    price_type: Literal["selling", "buying"] = Field(
        default="selling",
        description="Which catalog price seeds unit_price"
    )


class NextReferenceResponseDTO(BaseModel):
    """Response DTO for GetNextReference"""

    tenant_id: str = Field(...)
    document_type: DocumentType = Field(...)
    reference: str = Field(..., description="Allocated reference (e.g., QUO00006)")

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "document_type": "quotation",
                "reference": "QUO00006",
            }
        }


class CreateDocumentCommandDTO(BaseModel):
    """
    Command DTO for creating a sales document

    Used as input to CreateDocument use case. When reference_id is omitted a
    new reference is allocated.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    document_type: DocumentType = Field(..., description="Document kind")
    reference_id: Optional[str] = Field(default=None, description="Previously fetched reference")
    customer_id: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    issue_date: date = Field(...)
    due_date: date = Field(...)
    supply_date: Optional[date] = Field(default=None)
    payment_term: Optional[str] = Field(default=None)
    cost_center: str = Field(default="Main Center")
    currency: str = Field(default="SAR")
    discount_percent: Decimal = Field(default=Decimal("0"))
    lines: List[LineItemInputDTO] = Field(default_factory=list)
    terms_and_conditions: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class UpdateDocumentCommandDTO(BaseModel):
    """
    Command DTO for replacing the editable content of a draft document

    Used as input to UpdateDocument use case.
    """

    tenant_id: str = Field(...)
    document_type: DocumentType = Field(...)
    document_id: int = Field(...)
    customer_id: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    issue_date: date = Field(...)
    due_date: date = Field(...)
    supply_date: Optional[date] = Field(default=None)
    payment_term: Optional[str] = Field(default=None)
    cost_center: str = Field(default="Main Center")
    discount_percent: Decimal = Field(default=Decimal("0"))
    lines: List[LineItemInputDTO] = Field(default_factory=list)
    terms_and_conditions: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class ChangeStatusCommandDTO(BaseModel):
    """Command DTO for ChangeDocumentStatus"""

    tenant_id: str = Field(...)
    document_type: DocumentType = Field(...)
    document_id: int = Field(...)
    status: str = Field(..., description="Target status")


class CustomerSummaryDTO(BaseModel):
    """Customer display fields attached to a document"""

    customer_id: int = Field(...)
    customer_name: str = Field(...)
    phone: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    vat_registration_number: Optional[str] = Field(default=None)


class DocumentResponseDTO(BaseModel):
    """
    Response DTO for a full sales document

    Returned by CreateDocument, UpdateDocument, GetDocument, ChangeDocumentStatus.
    """

    document_id: int = Field(...)
    tenant_id: str = Field(...)
    document_type: DocumentType = Field(...)
    reference_id: str = Field(...)
    customer_id: Optional[int] = Field(default=None)
    customer: Optional[CustomerSummaryDTO] = Field(default=None)
    description: Optional[str] = Field(default=None)
    issue_date: date = Field(...)
    due_date: date = Field(...)
    supply_date: Optional[date] = Field(default=None)
    payment_term: Optional[str] = Field(default=None)
    cost_center: str = Field(...)
    currency: str = Field(...)
    discount_percent: Decimal = Field(...)
    subtotal: Decimal = Field(...)
    discount_total: Decimal = Field(...)
    vat_total: Decimal = Field(...)
    total_amount: Decimal = Field(...)
    status: str = Field(...)
    terms_and_conditions: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    qr_code: Optional[str] = Field(default=None)
    lines: List[LineItemDTO] = Field(default_factory=list)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)

    class Config:
        json_schema_extra = {
            "example": {
                "document_id": 1,
                "tenant_id": "tenant_xyz789",
                "document_type": "quotation",
                "reference_id": "QUO00001",
                "customer_id": 7,
                "issue_date": "2024-01-01",
                "due_date": "2024-01-08",
                "cost_center": "Main Center",
                "currency": "SAR",
                "discount_percent": "0.00",
                "subtotal": "250.00",
                "discount_total": "20.00",
                "vat_total": "29.50",
                "total_amount": "259.50",
                "status": "draft",
                "lines": [],
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z",
            }
        }


class DocumentSummaryDTO(BaseModel):
    """Document row in list responses"""

    document_id: int = Field(...)
    reference_id: str = Field(...)
    customer_id: Optional[int] = Field(default=None)
    issue_date: date = Field(...)
    due_date: date = Field(...)
    total_amount: Decimal = Field(...)
    status: str = Field(...)
    created_at: datetime = Field(...)


class ListDocumentsResponseDTO(BaseModel):
    """Paginated document list"""

    documents: List[DocumentSummaryDTO] = Field(default_factory=list)
    total: int = Field(..., description="Total matching documents")
    limit: int = Field(...)
    offset: int = Field(...)


class ExpiryResultDTO(BaseModel):
    """Summary of one ExpireOverdueDocuments run"""

    as_of: date = Field(...)
    expired_quotations: int = Field(default=0)
    expired_proforma_invoices: int = Field(default=0)
    overdue_invoices: int = Field(default=0)
    execution_time_ms: int = Field(default=0)
