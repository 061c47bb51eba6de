"""GetNextReference Use Case

Allocates the next human-readable reference for a new sales document.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.reference_counter_repository import ReferenceCounterRepository
from src.domain.document import DocumentType
from src.domain.reference import format_reference
from .dtos import NextReferenceResponseDTO

logger = logging.getLogger(__name__)


class GetNextReference:
    """
    Use Case: Allocate next document reference

    Business Rules:
    1. References are sequential per (tenant, document type), starting at 1
    2. Allocation is atomic in the database; concurrent calls never share a number
    3. Every call consumes a number; unused references leave gaps
    4. A failed lookup is an error, never a guessed reference

    Flow:
    1. Atomically increment the counter
    2. Commit so the number is reserved for everyone
    3. Format the reference (prefix + 5 digits)
    """

    def __init__(self, uow: UnitOfWork, reference_counter_repo: ReferenceCounterRepository):
        self.uow = uow
        self.reference_counter_repo = reference_counter_repo

    async def execute(
        self, tenant_id: str, document_type: DocumentType
    ) -> Result[NextReferenceResponseDTO]:
        """
        Execute reference allocation

        Args:
            tenant_id: Tenant identifier
            document_type: Document kind

        Returns:
            Result[NextReferenceResponseDTO]: Allocated reference or
            REFERENCE_ALLOCATION_FAILED
        """
        try:
            # Step 1: Atomic increment
            number = await self.reference_counter_repo.allocate_next(tenant_id, document_type)

            # Step 2: Reserve
            await self.uow.commit()

            # Step 3: Format
            reference = format_reference(document_type, number)
            logger.info(f"Allocated reference {reference} for tenant {tenant_id}")

            return Return.ok(
                NextReferenceResponseDTO(
                    tenant_id=tenant_id,
                    document_type=document_type,
                    reference=reference,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Reference allocation failed for tenant {tenant_id}: {e}")
            return Return.err(
                Error(
                    code="REFERENCE_ALLOCATION_FAILED",
                    message=f"Could not allocate a {document_type.value} reference",
                    reason=str(e),
                )
            )
