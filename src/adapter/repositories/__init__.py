from .sales_document_repository import SqlAlchemySalesDocumentRepository
from .document_line_repository import SqlAlchemyDocumentLineRepository
from .reference_counter_repository import SqlAlchemyReferenceCounterRepository
from .customer_repository import SqlAlchemyCustomerRepository
from .catalog_item_repository import SqlAlchemyCatalogItemRepository

__all__ = [
    "SqlAlchemySalesDocumentRepository",
    "SqlAlchemyDocumentLineRepository",
    "SqlAlchemyReferenceCounterRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyCatalogItemRepository",
]
