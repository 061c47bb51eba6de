from .base import BaseModel
from .document import (
    SalesDocument,
    DocumentType,
    QuotationStatus,
    InvoiceStatus,
    can_transition,
    is_valid_status,
)
from .document_line import DocumentLine
from .reference_counter import ReferenceCounter
from .customer import Customer
from .catalog_item import CatalogItem, CatalogItemType

__all__ = [
    "BaseModel",
    "SalesDocument",
    "DocumentType",
    "QuotationStatus",
    "InvoiceStatus",
    "can_transition",
    "is_valid_status",
    "DocumentLine",
    "ReferenceCounter",
    "Customer",
    "CatalogItem",
    "CatalogItemType",
]
