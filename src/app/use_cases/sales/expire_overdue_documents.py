"""ExpireOverdueDocuments Use Case

Marks documents whose due date has passed: quotations and proforma invoices
become expired, unpaid tax invoices become overdue.
"""

import logging
import time
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.domain.document import DocumentType, QuotationStatus, InvoiceStatus
from .dtos import ExpiryResultDTO

logger = logging.getLogger(__name__)


class ExpireOverdueDocuments:
    """
    Use Case: Expire past-due documents across all tenants

    Business Rules:
    1. Sent quotations and proforma invoices due before as_of -> expired
    2. Sent or not-paid tax invoices due before as_of -> overdue
    3. A document due on as_of itself is not yet past due
    4. All changes are committed together

    Flow:
    1. Collect past-due documents per type
    2. Apply the new status
    3. Commit transaction
    """

    EXPIRY_RULES = (
        (DocumentType.QUOTATION, [QuotationStatus.SENT.value], QuotationStatus.EXPIRED.value),
        (DocumentType.PROFORMA_INVOICE, [QuotationStatus.SENT.value], QuotationStatus.EXPIRED.value),
        (
            DocumentType.INVOICE,
            [InvoiceStatus.SENT.value, InvoiceStatus.NOT_PAID.value],
            InvoiceStatus.OVERDUE.value,
        ),
    )

    def __init__(self, uow: UnitOfWork, document_repo: SalesDocumentRepository):
        self.uow = uow
        self.document_repo = document_repo

    async def execute(self, as_of: date) -> Result[ExpiryResultDTO]:
        """
        Execute expiry pass

        Args:
            as_of: Reference date (usually today)

        Returns:
            Result[ExpiryResultDTO]: Counts per document type
        """
        start_time = time.time()
        counts = {}

        try:
            for document_type, statuses, target_status in self.EXPIRY_RULES:
                documents = await self.document_repo.get_past_due(document_type, statuses, as_of)
                for document in documents:
                    document.status = target_status
                    await self.document_repo.update(document)
                    logger.info(
                        f"{document.reference_id} (tenant {document.tenant_id}) -> {target_status}, "
                        f"due {document.due_date}"
                    )
                counts[document_type] = len(documents)

            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Document expiry failed: {e}")
            return Return.err(
                Error(
                    code="EXPIRE_DOCUMENTS_FAILED",
                    message="Failed to expire past-due documents",
                    reason=str(e),
                )
            )

        return Return.ok(
            ExpiryResultDTO(
                as_of=as_of,
                expired_quotations=counts.get(DocumentType.QUOTATION, 0),
                expired_proforma_invoices=counts.get(DocumentType.PROFORMA_INVOICE, 0),
                overdue_invoices=counts.get(DocumentType.INVOICE, 0),
                execution_time_ms=int((time.time() - start_time) * 1000),
            )
        )
