"""Catalog Item Domain Entity

Products and services that seed new document lines.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Integer, Numeric, String
from src.domain.base import BaseModel


class CatalogItemType(str, Enum):
    """Catalog item kinds"""
    PRODUCT = "product"
    SERVICE = "service"


class CatalogItem(BaseModel, table=True):
    """
    Catalog Item - Product or service with prices and a tax label

    Domain Rules:
    - tax is a free-form label such as "Vat 15%"; the rate is extracted
      with parse_vat_label when a line is seeded
    - name_arabic is optional; name_english is always present
    """

    __tablename__ = "catalog_items"
    __table_args__ = (
        Index("ix_catalog_items_tenant_id", "tenant_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(
        description="Owning tenant"
    )

    code: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Catalog code (e.g., Prod-001)"
    )

    item_type: CatalogItemType = Field(
        default=CatalogItemType.PRODUCT,
    )

    name_english: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    name_arabic: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    selling_price: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    buying_price: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    tax: Optional[str] = Field(
        default="Vat 15%",
        sa_column=Column(String(50), nullable=True, default="Vat 15%"),
        description="Tax label (e.g., 'Vat 15%')"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )

    @property
    def display_name(self) -> str:
        return self.name_english or self.name_arabic or "Unnamed Product"
