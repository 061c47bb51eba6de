"""
List Documents Use Case

Retrieves the quotations, proforma invoices or tax invoices of a tenant
with filters and pagination.
"""
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.sales_document_repository import SalesDocumentRepository, DocumentFilter
from src.domain.document import DocumentType
from .dtos import ListDocumentsResponseDTO
from .mappers import to_summary_dto


class ListDocuments:
    """
    Use case: List sales documents

    Documents are ordered by created_at ASC (oldest first), matching the
    sequential reference order.
    """

    def __init__(self, document_repo: SalesDocumentRepository):
        self.document_repo = document_repo

    async def execute(
        self,
        tenant_id: str,
        document_type: DocumentType,
        filters: Optional[DocumentFilter] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListDocumentsResponseDTO]:
        """
        List documents for a tenant with pagination.

        Args:
            tenant_id: Tenant identifier
            document_type: Document kind
            filters: Optional customer, status, date range and amount filters
            limit: Maximum number of documents to return (default 20)
            offset: Number of documents to skip (default 0)

        Returns:
            Result[ListDocumentsResponseDTO]: Paginated document list
        """
        documents, total = await self.document_repo.list(
            tenant_id=tenant_id,
            document_type=document_type,
            filters=filters,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListDocumentsResponseDTO(
                documents=[to_summary_dto(document) for document in documents],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
