"""Reference Counter Domain Entity

Authoritative per-tenant, per-document-type sequence for document references.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Integer, CheckConstraint, UniqueConstraint
from src.domain.base import BaseModel
from src.domain.document import DocumentType


class ReferenceCounter(BaseModel, table=True):
    """
    Reference Counter - Last allocated reference number

    Domain Rules:
    - One counter per (tenant_id, document_type)
    - value only grows; it is incremented atomically in the database
    - value = 0 means no reference allocated yet
    """

    __tablename__ = "reference_counters"
    __table_args__ = (
        UniqueConstraint("tenant_id", "document_type", name="uq_reference_counters_tenant_type"),
        CheckConstraint("value >= 0", name="reference_counter_non_negative"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(
        description="Tenant owning the sequence"
    )

    document_type: DocumentType = Field(
        description="Document kind the sequence numbers"
    )

    value: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Last allocated number"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
