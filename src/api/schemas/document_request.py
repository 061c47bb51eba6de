"""Request schemas for Sales Document API

Pydantic models for validating incoming HTTP requests. Numeric fields go
through the amount parsers: non-numeric input is a 422, out-of-range input
is clamped.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, Literal
from pydantic import BaseModel, Field, field_validator
from src.domain.amounts import parse_money, parse_percent, parse_quantity


class LineItemRequestSchema(BaseModel):
    """
    One document line as entered

    vat_amount and line_amount sent by a client are ignored; they are
    recomputed by the server.
    """

    catalog_item_id: Optional[int] = Field(default=None)

    description: str = Field(
        default="",
        max_length=500,
        description="Line description"
    )

    quantity: Decimal = Field(
        default=Decimal("1"),
        description="Quantity (fractional allowed, negative clamped to 0)"
    )

    unit_price: Decimal = Field(
        default=Decimal("0"),
        description="Price per unit (negative clamped to 0)"
    )

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        description="Discount percentage, clamped to [0, 100]"
    )

    vat_percent: Decimal = Field(
        default=Decimal("15"),
        description="VAT percentage, clamped to [0, 100]"
    )

    @field_validator('quantity', mode='before')
    @classmethod
    def validate_quantity(cls, v):
        return parse_quantity(v)

    @field_validator('unit_price', mode='before')
    @classmethod
    def validate_unit_price(cls, v):
        return parse_money(v)

    @field_validator('discount_percent', mode='before')
    @classmethod
    def validate_discount_percent(cls, v):
        return parse_percent(v, "discount_percent")

    @field_validator('vat_percent', mode='before')
    @classmethod
    def validate_vat_percent(cls, v):
        return parse_percent(v, "vat_percent")


class CalculateRequestSchema(BaseModel):
    """
    Request schema for previewing document amounts

    Used for POST /sales/calculate endpoint.
    """

    lines: List[LineItemRequestSchema] = Field(default_factory=list)

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        description="Optional document-level discount percentage"
    )

    @field_validator('discount_percent', mode='before')
    @classmethod
    def validate_discount_percent(cls, v):
        return parse_percent(v, "discount_percent")

    class Config:
        json_schema_extra = {
            "example": {
                "lines": [
                    {"quantity": "2", "unit_price": "100.00", "discount_percent": "10", "vat_percent": "15"},
                    {"quantity": "1", "unit_price": "50.00", "discount_percent": "0", "vat_percent": "5"},
                ]
            }
        }


class SeedLineRequestSchema(BaseModel):
    """
    Request schema for seeding a line from the catalog

    Used for POST /sales/lines/from-catalog endpoint.
    """

    tenant_id: str = Field(..., min_length=1)
    catalog_item_id: int = Field(...)
    quantity: Decimal = Field(default=Decimal("1"))
    price_type: Literal["selling", "buying"] = Field(default="selling")

    @field_validator('quantity', mode='before')
    @classmethod
    def validate_quantity(cls, v):
        return parse_quantity(v)


class DocumentRequestSchema(BaseModel):
    """
    Request schema for creating a sales document

    Used for POST /sales/documents/{document_type} endpoint.
    """

    tenant_id: str = Field(
        ...,
        min_length=1,
        description="Tenant identifier (required, non-empty)"
    )

    reference_id: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Reference fetched from next-reference; allocated when omitted"
    )

    customer_id: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    issue_date: date = Field(...)
    due_date: date = Field(...)
    supply_date: Optional[date] = Field(default=None)
    payment_term: Optional[str] = Field(default=None, max_length=100)
    cost_center: str = Field(default="Main Center", max_length=100)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)

    discount_percent: Decimal = Field(
        default=Decimal("0"),
        description="Document-level discount percentage"
    )

    lines: List[LineItemRequestSchema] = Field(default_factory=list)
    terms_and_conditions: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    @field_validator('discount_percent', mode='before')
    @classmethod
    def validate_discount_percent(cls, v):
        return parse_percent(v, "discount_percent")

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "customer_id": 7,
                "issue_date": "2024-01-01",
                "due_date": "2024-01-08",
                "lines": [
                    {"description": "Consulting", "quantity": "2", "unit_price": "100.00",
                     "discount_percent": "10", "vat_percent": "15"},
                ],
            }
        }


class UpdateDocumentRequestSchema(BaseModel):
    """
    Request schema for editing a draft document

    Used for PUT /sales/documents/{document_type}/{document_id} endpoint.
    Lines replace the existing ones as a whole.
    """

    tenant_id: str = Field(..., min_length=1)
    customer_id: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    issue_date: date = Field(...)
    due_date: date = Field(...)
    supply_date: Optional[date] = Field(default=None)
    payment_term: Optional[str] = Field(default=None, max_length=100)
    cost_center: str = Field(default="Main Center", max_length=100)
    discount_percent: Decimal = Field(default=Decimal("0"))
    lines: List[LineItemRequestSchema] = Field(default_factory=list)
    terms_and_conditions: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    @field_validator('discount_percent', mode='before')
    @classmethod
    def validate_discount_percent(cls, v):
        return parse_percent(v, "discount_percent")


class StatusChangeRequestSchema(BaseModel):
    """
    Request schema for changing document status

    Used for PATCH /sales/documents/{document_type}/{document_id}/status endpoint.
    """

    tenant_id: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1, description="Target status")

    class Config:
        json_schema_extra = {
            "example": {"tenant_id": "tenant_xyz789", "status": "sent"}
        }
