"""ChangeDocumentStatus Use Case

Moves a sales document along its status lifecycle.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.document import can_transition, is_valid_status
from .dtos import ChangeStatusCommandDTO, DocumentResponseDTO
from .mappers import to_document_dto

logger = logging.getLogger(__name__)


class ChangeDocumentStatus:
    """
    Use Case: Change document status

    Business Rules:
    1. The target status must belong to the document type's status set
    2. Only transitions listed in the transition table are allowed
       (quotation/proforma: draft -> sent -> accepted/declined/expired;
       invoice: draft -> sent -> paid/not_paid/overdue, not_paid -> paid/overdue,
       overdue -> paid)
    3. Terminal statuses never change

    Flow:
    1. Validate target status
    2. Load document
    3. Check transition
    4. Update and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: SalesDocumentRepository,
        line_repo: DocumentLineRepository,
        customer_repo: CustomerRepository,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo

    async def execute(self, command: ChangeStatusCommandDTO) -> Result[DocumentResponseDTO]:
        # Step 1: Validate target status
        if not is_valid_status(command.document_type, command.status):
            return Return.err(
                Error(
                    code="INVALID_STATUS",
                    message=f"{command.status!r} is not a {command.document_type.value} status",
                )
            )

        try:
            # Step 2: Load document
            document = await self.document_repo.get_by_id(
                command.tenant_id, command.document_type, command.document_id
            )
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"{command.document_type.value} {command.document_id} not found "
                                f"for tenant {command.tenant_id}",
                    )
                )

            # Step 3: Check transition
            if not can_transition(command.document_type, document.status, command.status):
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message=f"Cannot change {document.reference_id} from {document.status} "
                                f"to {command.status}",
                    )
                )

            # Step 4: Update and commit
            previous_status = document.status
            document.status = command.status
            updated_document = await self.document_repo.update(document)
            await self.uow.commit()

            logger.info(
                f"{updated_document.reference_id} status {previous_status} -> {command.status} "
                f"(tenant {command.tenant_id})"
            )

            lines = await self.line_repo.get_by_document_id(updated_document.id)
            customer = None
            if updated_document.customer_id is not None:
                customer = await self.customer_repo.get_by_id(command.tenant_id, updated_document.customer_id)

            return Return.ok(to_document_dto(updated_document, lines, customer))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_STATUS_FAILED",
                    message="Failed to change document status",
                    reason=str(e),
                )
            )
