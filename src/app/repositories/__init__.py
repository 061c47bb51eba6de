from .sales_document_repository import SalesDocumentRepository, DocumentFilter
from .document_line_repository import DocumentLineRepository
from .reference_counter_repository import ReferenceCounterRepository
from .customer_repository import CustomerRepository
from .catalog_item_repository import CatalogItemRepository

__all__ = [
    "SalesDocumentRepository",
    "DocumentFilter",
    "DocumentLineRepository",
    "ReferenceCounterRepository",
    "CustomerRepository",
    "CatalogItemRepository",
]
