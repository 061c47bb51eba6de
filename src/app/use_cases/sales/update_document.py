"""UpdateDocument Use Case

Replaces the header fields and lines of a draft sales document.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.qr_code_service import QrCodeService
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.amounts import AmountValidationError, parse_percent
from src.domain.document import DocumentType
from src.domain.document_line import DocumentLine
from .calculate_document import build_lines
from .dtos import UpdateDocumentCommandDTO, DocumentResponseDTO
from .mappers import to_document_dto

logger = logging.getLogger(__name__)


class UpdateDocument:
    """
    Use Case: Edit a draft document

    Business Rules:
    1. Only draft documents are editable (DOCUMENT_NOT_EDITABLE otherwise)
    2. Reference, type and currency never change
    3. Lines are replaced as a whole and totals fully recomputed
    4. Same date and customer validation as creation

    Flow:
    1. Load document
    2. Check status is draft
    3. Validate dates and customer
    4. Recalculate lines and totals
    5. Replace lines, update header
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: SalesDocumentRepository,
        line_repo: DocumentLineRepository,
        customer_repo: CustomerRepository,
        qr_code_service: Optional[QrCodeService] = None,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo
        self.qr_code_service = qr_code_service

    async def execute(self, command: UpdateDocumentCommandDTO) -> Result[DocumentResponseDTO]:
        try:
            # Step 1: Load document
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

            # Step 2: Only drafts are editable
            if document.status != "draft":
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_EDITABLE",
                        message=f"Document {document.reference_id} is {document.status}; only drafts can be edited",
                    )
                )

            # Step 3: Validate dates and customer
            if command.due_date < command.issue_date:
                return Return.err(
                    Error(
                        code="INVALID_DUE_DATE",
                        message=f"Due date {command.due_date} is before issue date {command.issue_date}",
                    )
                )

            customer = None
            if command.customer_id is not None:
                customer = await self.customer_repo.get_by_id(command.tenant_id, command.customer_id)
                if not customer:
                    return Return.err(
                        Error(
                            code="CUSTOMER_NOT_FOUND",
                            message=f"Customer {command.customer_id} not found for tenant {command.tenant_id}",
                        )
                    )

            # Step 4: Recalculate
            try:
                lines, totals = build_lines(command.lines, command.discount_percent)
            except AmountValidationError as e:
                return Return.err(Error(code="INVALID_AMOUNT", message=str(e), reason=e.field))

            # Step 5: Replace lines and update header
            await self.line_repo.delete_by_document_id(document.id)
            new_lines = await self.line_repo.create_many([
                DocumentLine(
                    document_id=document.id,
                    position=line.position,
                    catalog_item_id=line.catalog_item_id,
                    description=line.description,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    discount_percent=line.discount_percent,
                    vat_percent=line.vat_percent,
                    vat_amount=line.vat_amount,
                    line_amount=line.line_amount,
                )
                for line in lines
            ])

            document.customer_id = command.customer_id
            document.description = command.description
            document.issue_date = command.issue_date
            document.due_date = command.due_date
            document.supply_date = command.supply_date
            document.payment_term = command.payment_term
            document.cost_center = command.cost_center
            document.discount_percent = parse_percent(command.discount_percent, "discount_percent")
            document.subtotal = totals.subtotal
            document.discount_total = totals.discount_total
            document.vat_total = totals.vat_total
            document.total_amount = totals.total_amount
            document.terms_and_conditions = command.terms_and_conditions
            document.notes = command.notes

            if document.document_type == DocumentType.INVOICE and self.qr_code_service:
                document.qr_code = self.qr_code_service.generate_invoice_qr(
                    timestamp=datetime.combine(
                        command.issue_date, datetime.utcnow().time().replace(microsecond=0)
                    ),
                    total_amount=totals.total_amount,
                    vat_total=totals.vat_total,
                )

            updated_document = await self.document_repo.update(document)

            # Step 6: Commit transaction
            await self.uow.commit()
            logger.info(f"Updated {document.reference_id} for tenant {command.tenant_id}")

            return Return.ok(to_document_dto(updated_document, new_lines, customer))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_DOCUMENT_FAILED",
                    message="Failed to update document",
                    reason=str(e),
                )
            )
