"""Document Line Domain Entity

Persisted line items of a sales document.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel
from src.domain.line_item import LineItem


class DocumentLine(BaseModel, table=True):
    """
    Document Line - One row of a quotation, proforma or tax invoice

    Domain Rules:
    - Each line belongs to exactly one document
    - position orders the lines for display
    - vat_amount and line_amount are stored snapshots of the calculator output
    """

    __tablename__ = "document_lines"
    __table_args__ = (
        Index("ix_document_lines_document_id", "document_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
    )

    document_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("sales_documents.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to SalesDocument"
    )

    position: int = Field(
        default=0,
        description="Display order within the document"
    )

    catalog_item_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Product or service the line was seeded from"
    )

    description: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False, default=""),
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
    )

    discount_percent: Decimal = Field(
        sa_column=Column(Numeric(5, 2), nullable=False),
    )

    vat_percent: Decimal = Field(
        sa_column=Column(Numeric(5, 2), nullable=False),
    )

    vat_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    line_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )

    def to_line_item(self) -> LineItem:
        """Rebuild the calculator input from the stored fields"""
        return LineItem(
            quantity=Decimal(self.quantity),
            unit_price=Decimal(self.unit_price),
            discount_percent=Decimal(self.discount_percent),
            vat_percent=Decimal(self.vat_percent),
        )
