"""DeleteDocument Use Case

Deletes a sales document together with its lines.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document import DocumentType

logger = logging.getLogger(__name__)


class DeleteDocument:
    """
    Use Case: Delete a sales document

    Business Rules:
    1. The whole document goes: header and every line
    2. The reference number is not reused (counter is never decremented)

    Flow:
    1. Load document
    2. Delete lines, then document
    3. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: SalesDocumentRepository,
        line_repo: DocumentLineRepository,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_repo = line_repo

    async def execute(
        self, tenant_id: str, document_type: DocumentType, document_id: int
    ) -> Result[None]:
        try:
            document = await self.document_repo.get_by_id(tenant_id, document_type, document_id)
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"{document_type.value} {document_id} not found for tenant {tenant_id}",
                    )
                )

            await self.line_repo.delete_by_document_id(document.id)
            await self.document_repo.delete(document)

            await self.uow.commit()
            logger.info(f"Deleted {document.reference_id} for tenant {tenant_id}")

            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_DOCUMENT_FAILED",
                    message="Failed to delete document",
                    reason=str(e),
                )
            )
