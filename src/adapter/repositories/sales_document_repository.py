"""SQLAlchemy Sales Document Repository Implementation

Implements sales document persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date, datetime
from sqlmodel import select, func, and_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.sales_document_repository import SalesDocumentRepository, DocumentFilter
from src.domain.document import SalesDocument, DocumentType


class SqlAlchemySalesDocumentRepository(SalesDocumentRepository):
    """
    SQLAlchemy implementation of SalesDocumentRepository

    Features:
    - Tenant and document type scoping on every read
    - Filtered, paginated listing with total count
    - Reference uniqueness enforced by the database constraint
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: SalesDocument) -> SalesDocument:
        """
        Create a new sales document

        Args:
            document: SalesDocument entity to persist

        Returns:
            Created SalesDocument with generated ID

        Raises:
            IntegrityError: If reference_id already exists for the tenant and type
        """
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(
        self, tenant_id: str, document_type: DocumentType, document_id: int
    ) -> Optional[SalesDocument]:
        stmt = select(SalesDocument).where(
            and_(
                SalesDocument.id == document_id,
                SalesDocument.tenant_id == tenant_id,
                SalesDocument.document_type == document_type,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: str,
        document_type: DocumentType,
        filters: Optional[DocumentFilter] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[SalesDocument], int]:
        """
        List documents of a tenant and type with filters and pagination

        Args:
            tenant_id: Tenant identifier
            document_type: Document kind
            filters: Optional DocumentFilter
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Tuple of (list of documents, total count)
        """
        conditions = [
            SalesDocument.tenant_id == tenant_id,
            SalesDocument.document_type == document_type,
        ]
        conditions.extend(self._filter_conditions(filters or DocumentFilter()))

        count_stmt = select(func.count()).select_from(SalesDocument).where(and_(*conditions))
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar_one()

        stmt = (
            select(SalesDocument)
            .where(and_(*conditions))
            .order_by(SalesDocument.created_at.asc(), SalesDocument.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        documents = list(result.scalars().all())

        return documents, total

    @staticmethod
    def _filter_conditions(filters: DocumentFilter) -> List:
        conditions = []
        if filters.customer_id is not None:
            conditions.append(SalesDocument.customer_id == filters.customer_id)
        if filters.status is not None:
            conditions.append(SalesDocument.status == filters.status)
        if filters.issue_date_from is not None:
            conditions.append(SalesDocument.issue_date >= filters.issue_date_from)
        if filters.issue_date_to is not None:
            conditions.append(SalesDocument.issue_date <= filters.issue_date_to)
        if filters.due_date_from is not None:
            conditions.append(SalesDocument.due_date >= filters.due_date_from)
        if filters.due_date_to is not None:
            conditions.append(SalesDocument.due_date <= filters.due_date_to)
        if filters.min_amount is not None:
            conditions.append(SalesDocument.total_amount >= filters.min_amount)
        if filters.max_amount is not None:
            conditions.append(SalesDocument.total_amount <= filters.max_amount)
        return conditions

    async def update(self, document: SalesDocument) -> SalesDocument:
        """
        Update an existing document

        Args:
            document: SalesDocument entity with updated values

        Returns:
            Updated SalesDocument
        """
        document.updated_at = datetime.utcnow()
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def delete(self, document: SalesDocument) -> None:
        await self.session.delete(document)
        await self.session.flush()

    async def get_past_due(
        self, document_type: DocumentType, statuses: List[str], as_of: date
    ) -> List[SalesDocument]:
        """
        Retrieve documents past their due date in one of the given statuses

        Args:
            document_type: Document kind
            statuses: Statuses eligible for expiry
            as_of: Reference date; documents due strictly before it qualify

        Returns:
            List of documents across all tenants
        """
        stmt = (
            select(SalesDocument)
            .where(
                and_(
                    SalesDocument.document_type == document_type,
                    SalesDocument.status.in_(statuses),
                    SalesDocument.due_date < as_of,
                )
            )
            .order_by(SalesDocument.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
