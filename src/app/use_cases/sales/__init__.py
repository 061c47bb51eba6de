"""Sales document use cases"""
from .calculate_document import CalculateDocument, build_lines
from .seed_line_from_catalog import SeedLineFromCatalog
from .get_next_reference import GetNextReference
from .create_document import CreateDocument
from .update_document import UpdateDocument
from .get_document import GetDocument
from .list_documents import ListDocuments
from .delete_document import DeleteDocument
from .change_document_status import ChangeDocumentStatus
from .expire_overdue_documents import ExpireOverdueDocuments
from .dtos import (
    LineItemInputDTO,
    LineItemDTO,
    DocumentTotalsDTO,
    CalculateDocumentCommandDTO,
    CalculateDocumentResponseDTO,
    SeedLineCommandDTO,
    NextReferenceResponseDTO,
    CreateDocumentCommandDTO,
    UpdateDocumentCommandDTO,
    ChangeStatusCommandDTO,
    CustomerSummaryDTO,
    DocumentResponseDTO,
    DocumentSummaryDTO,
    ListDocumentsResponseDTO,
    ExpiryResultDTO,
)

__all__ = [
    "CalculateDocument",
    "build_lines",
    "SeedLineFromCatalog",
    "GetNextReference",
    "CreateDocument",
    "UpdateDocument",
    "GetDocument",
    "ListDocuments",
    "DeleteDocument",
    "ChangeDocumentStatus",
    "ExpireOverdueDocuments",
    "LineItemInputDTO",
    "LineItemDTO",
    "DocumentTotalsDTO",
    "CalculateDocumentCommandDTO",
    "CalculateDocumentResponseDTO",
    "SeedLineCommandDTO",
    "NextReferenceResponseDTO",
    "CreateDocumentCommandDTO",
    "UpdateDocumentCommandDTO",
    "ChangeStatusCommandDTO",
    "CustomerSummaryDTO",
    "DocumentResponseDTO",
    "DocumentSummaryDTO",
    "ListDocumentsResponseDTO",
    "ExpiryResultDTO",
]
