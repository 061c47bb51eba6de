"""Sales Document Domain Entity

Quotations, proforma invoices and tax invoices share one shape and one table.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Type
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Integer, Numeric, String, Date, Text, UniqueConstraint, Index
from src.domain.base import BaseModel


class DocumentType(str, Enum):
    """Sales document kinds"""
    QUOTATION = "quotation"
    PROFORMA_INVOICE = "proforma_invoice"
    INVOICE = "invoice"


class QuotationStatus(str, Enum):
    """Status of quotations and proforma invoices"""
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class InvoiceStatus(str, Enum):
    """Status of tax invoices"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    NOT_PAID = "not_paid"
    OVERDUE = "overdue"


STATUS_TYPES: dict[DocumentType, Type[Enum]] = {
    DocumentType.QUOTATION: QuotationStatus,
    DocumentType.PROFORMA_INVOICE: QuotationStatus,
    DocumentType.INVOICE: InvoiceStatus,
}

_QUOTATION_TRANSITIONS: dict[str, frozenset[str]] = {
    QuotationStatus.DRAFT.value: frozenset({QuotationStatus.SENT.value, QuotationStatus.EXPIRED.value}),
    QuotationStatus.SENT.value: frozenset({
        QuotationStatus.ACCEPTED.value,
        QuotationStatus.DECLINED.value,
        QuotationStatus.EXPIRED.value,
    }),
    QuotationStatus.ACCEPTED.value: frozenset(),
    QuotationStatus.DECLINED.value: frozenset(),
    QuotationStatus.EXPIRED.value: frozenset(),
}

_INVOICE_TRANSITIONS: dict[str, frozenset[str]] = {
    InvoiceStatus.DRAFT.value: frozenset({InvoiceStatus.SENT.value}),
    InvoiceStatus.SENT.value: frozenset({
        InvoiceStatus.PAID.value,
        InvoiceStatus.NOT_PAID.value,
        InvoiceStatus.OVERDUE.value,
    }),
    InvoiceStatus.NOT_PAID.value: frozenset({InvoiceStatus.PAID.value, InvoiceStatus.OVERDUE.value}),
    InvoiceStatus.OVERDUE.value: frozenset({InvoiceStatus.PAID.value}),
    InvoiceStatus.PAID.value: frozenset(),
}

STATUS_TRANSITIONS: dict[DocumentType, dict[str, frozenset[str]]] = {
    DocumentType.QUOTATION: _QUOTATION_TRANSITIONS,
    DocumentType.PROFORMA_INVOICE: _QUOTATION_TRANSITIONS,
    DocumentType.INVOICE: _INVOICE_TRANSITIONS,
}


def is_valid_status(document_type: DocumentType, status: str) -> bool:
    """Check that `status` belongs to the closed status set of `document_type`"""
    return status in STATUS_TRANSITIONS[document_type]


def can_transition(document_type: DocumentType, current: str, target: str) -> bool:
    """Check the transition table for `document_type`"""
    return target in STATUS_TRANSITIONS[document_type].get(current, frozenset())


class SalesDocument(BaseModel, table=True):
    """
    Sales Document - Quotation, proforma invoice or tax invoice

    Domain Rules:
    - reference_id is unique per (tenant_id, document_type)
    - Totals are always derived from the document lines, never edited directly
    - Status belongs to the closed set of the document type and only moves
      along the transition table
    - due_date must not precede issue_date
    - qr_code is only set for tax invoices
    """

    __tablename__ = "sales_documents"
    __table_args__ = (
        UniqueConstraint("tenant_id", "document_type", "reference_id", name="uq_sales_documents_reference"),
        Index("ix_sales_documents_tenant_type", "tenant_id", "document_type"),
        Index("ix_sales_documents_status", "status"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Unique document identifier (auto-increment)"
    )

    tenant_id: str = Field(
        description="Owning company (tenant)"
    )

    document_type: DocumentType = Field(
        description="Document kind (quotation, proforma_invoice, invoice)"
    )

    reference_id: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Human-readable sequential reference (e.g., QUO00001)"
    )

    customer_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Customer the document is addressed to"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    supply_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Supply date (tax invoices)"
    )

    payment_term: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    cost_center: str = Field(
        default="Main Center",
        sa_column=Column(String(100), nullable=False, default="Main Center"),
    )

    currency: str = Field(
        default="SAR",
        sa_column=Column(String(3), nullable=False, default="SAR"),
        description="Currency code (ISO 4217)"
    )

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Document-level discount percentage"
    )

    subtotal: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Sum of gross line amounts (pre-discount, pre-VAT)"
    )

    discount_total: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    vat_total: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    total_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    status: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, default="draft"),
    )

    terms_and_conditions: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    qr_code: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="ZATCA QR payload (base64 TLV), tax invoices only"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
