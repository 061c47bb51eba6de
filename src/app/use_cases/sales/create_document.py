"""CreateDocument Use Case

Saves a new quotation, proforma invoice or tax invoice with its lines.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.qr_code_service import QrCodeService
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.app.repositories.reference_counter_repository import ReferenceCounterRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.amounts import AmountValidationError, parse_percent
from src.domain.document import SalesDocument, DocumentType
from src.domain.document_line import DocumentLine
from src.domain.reference import format_reference, parse_reference
from .calculate_document import build_lines
from .dtos import CreateDocumentCommandDTO, DocumentResponseDTO
from .mappers import to_document_dto

logger = logging.getLogger(__name__)


class CreateDocument:
    """
    Use Case: Create a sales document

    Business Rules:
    1. due_date must not precede issue_date
    2. customer_id, when given, must belong to the tenant
    3. Line amounts and totals are recomputed here; client values are ignored
    4. A caller-supplied reference must match the type prefix; the counter is
       raised to it so later allocations stay above it
    5. Without a reference, the next one is allocated atomically
    6. Duplicate reference within tenant and type -> REFERENCE_CONFLICT
    7. New documents start as draft
    8. Tax invoices get a ZATCA QR payload

    Flow:
    1. Validate dates
    2. Check customer
    3. Calculate lines and totals
    4. Resolve reference
    5. Persist document and lines
    6. Commit transaction
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: SalesDocumentRepository,
        line_repo: DocumentLineRepository,
        reference_counter_repo: ReferenceCounterRepository,
        customer_repo: CustomerRepository,
        qr_code_service: Optional[QrCodeService] = None,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.reference_counter_repo = reference_counter_repo
        self.customer_repo = customer_repo
        self.qr_code_service = qr_code_service

    async def execute(self, command: CreateDocumentCommandDTO) -> Result[DocumentResponseDTO]:
        """
        Execute document creation

        Args:
            command: CreateDocumentCommandDTO with header fields and raw lines

        Returns:
            Result[DocumentResponseDTO]: Created document or error
        """
        # Step 1: Validate dates
        if command.due_date < command.issue_date:
            return Return.err(
                Error(
                    code="INVALID_DUE_DATE",
                    message=f"Due date {command.due_date} is before issue date {command.issue_date}",
                )
            )

        try:
            # Step 2: Check customer
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

            # Step 3: Calculate lines and totals
            try:
                lines, totals = build_lines(command.lines, command.discount_percent)
            except AmountValidationError as e:
                return Return.err(Error(code="INVALID_AMOUNT", message=str(e), reason=e.field))

            # Step 4: Resolve reference
            if command.reference_id:
                reference_id = command.reference_id.strip()
                number = parse_reference(command.document_type, reference_id)
                if number is None:
                    return Return.err(
                        Error(
                            code="INVALID_REFERENCE",
                            message=f"Reference {reference_id!r} is not a valid "
                                    f"{command.document_type.value} reference",
                        )
                    )
                await self.reference_counter_repo.ensure_at_least(
                    command.tenant_id, command.document_type, number
                )
                reference_id = format_reference(command.document_type, number)
            else:
                try:
                    number = await self.reference_counter_repo.allocate_next(
                        command.tenant_id, command.document_type
                    )
                except Exception as e:
                    await self.uow.rollback()
                    logger.error(f"Reference allocation failed for tenant {command.tenant_id}: {e}")
                    return Return.err(
                        Error(
                            code="REFERENCE_ALLOCATION_FAILED",
                            message=f"Could not allocate a {command.document_type.value} reference",
                            reason=str(e),
                        )
                    )
                reference_id = format_reference(command.document_type, number)

            # Step 5: Persist document and lines
            now = datetime.utcnow()
            document = SalesDocument(
                tenant_id=command.tenant_id,
                document_type=command.document_type,
                reference_id=reference_id,
                customer_id=command.customer_id,
                description=command.description,
                issue_date=command.issue_date,
                due_date=command.due_date,
                supply_date=command.supply_date,
                payment_term=command.payment_term,
                cost_center=command.cost_center,
                currency=command.currency,
                discount_percent=parse_percent(command.discount_percent, "discount_percent"),
                subtotal=totals.subtotal,
                discount_total=totals.discount_total,
                vat_total=totals.vat_total,
                total_amount=totals.total_amount,
                status="draft",
                terms_and_conditions=command.terms_and_conditions,
                notes=command.notes,
                created_at=now,
                updated_at=now,
            )

            if command.document_type == DocumentType.INVOICE and self.qr_code_service:
                document.qr_code = self.qr_code_service.generate_invoice_qr(
                    timestamp=datetime.combine(command.issue_date, now.time().replace(microsecond=0)),
                    total_amount=totals.total_amount,
                    vat_total=totals.vat_total,
                )

            created_document = await self.document_repo.create(document)

            created_lines = await self.line_repo.create_many([
                DocumentLine(
                    document_id=created_document.id,
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

            # Step 6: Commit transaction
            await self.uow.commit()
            logger.info(
                f"Created {command.document_type.value} {reference_id} for tenant {command.tenant_id} "
                f"(total {totals.total_amount})"
            )

            # Step 7: Build response
            return Return.ok(to_document_dto(created_document, created_lines, customer))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REFERENCE_CONFLICT",
                    message=f"Reference already exists for tenant {command.tenant_id}",
                    reason=str(e.orig) if e.orig else str(e),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_DOCUMENT_FAILED",
                    message="Failed to create document",
                    reason=str(e),
                )
            )
