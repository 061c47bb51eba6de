"""GetDocument Use Case

Retrieves a sales document with its lines and customer display fields.
"""

from libs.result import Result, Return, Error
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.document import DocumentType
from .dtos import DocumentResponseDTO
from .mappers import to_document_dto


class GetDocument:
    """
    Get Document Use Case

    Read-only operation. Customer fields are looked up for display and
    never modified; a customer deleted since is simply omitted.
    """

    def __init__(
        self,
        document_repo: SalesDocumentRepository,
        line_repo: DocumentLineRepository,
        customer_repo: CustomerRepository,
    ):
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo

    async def execute(
        self, tenant_id: str, document_type: DocumentType, document_id: int
    ) -> Result[DocumentResponseDTO]:
        """
        Execute get document operation

        Errors:
            DOCUMENT_NOT_FOUND: No document of this type with this ID for the tenant
        """
        document = await self.document_repo.get_by_id(tenant_id, document_type, document_id)
        if not document:
            return Return.err(
                Error(
                    code="DOCUMENT_NOT_FOUND",
                    message=f"{document_type.value} {document_id} not found for tenant {tenant_id}",
                )
            )

        lines = await self.line_repo.get_by_document_id(document.id)

        customer = None
        if document.customer_id is not None:
            customer = await self.customer_repo.get_by_id(tenant_id, document.customer_id)

        return Return.ok(to_document_dto(document, lines, customer))
