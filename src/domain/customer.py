"""Customer Domain Entity

Customer records owned by the surrounding system; sales documents only read
their display fields.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Integer, String
from src.domain.base import BaseModel


class Customer(BaseModel, table=True):
    """Customer - Addressee of quotations and invoices"""

    __tablename__ = "customers"
    __table_args__ = (
        Index("ix_customers_tenant_id", "tenant_id"),
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
    )

    customer_name: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    vat_registration_number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    street_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    country: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    postal_code: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )

    @property
    def address(self) -> str:
        """Single-line postal address from the non-empty parts"""
        parts = [self.street_name, self.city, self.postal_code, self.country]
        return ", ".join(part for part in parts if part)
