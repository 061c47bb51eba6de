"""SQLAlchemy implementation of ReferenceCounterRepository

Allocates reference numbers with a single atomic UPDATE ... RETURNING so
concurrent requests for the same tenant and document type never share a number.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import select, update, and_
from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.reference_counter_repository import ReferenceCounterRepository
from src.domain.document import DocumentType
from src.domain.reference_counter import ReferenceCounter

logger = logging.getLogger(__name__)


class SqlAlchemyReferenceCounterRepository(ReferenceCounterRepository):
    """
    SQLAlchemy implementation of ReferenceCounterRepository

    Features:
    - Read-and-increment in one statement (no application-side max + 1)
    - First counter row inserted inside a savepoint
    - Retry when a concurrent request inserts the first row at the same time
    """

    MAX_ATTEMPTS = 3

    def __init__(self, session: AsyncSession):
        self.session = session

    async def allocate_next(self, tenant_id: str, document_type: DocumentType) -> int:
        """
        Increment the counter and return the new value

        Args:
            tenant_id: Tenant identifier
            document_type: Document kind

        Returns:
            Newly allocated sequence number (1 for the first allocation)

        Raises:
            IntegrityError: If the counter row could not be created after retries
        """
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            value = await self._increment(tenant_id, document_type)
            if value is not None:
                return value

            try:
                await self._insert_counter(tenant_id, document_type, 1)
                return 1
            except IntegrityError:
                logger.info(
                    f"Reference counter for tenant {tenant_id} ({document_type.value}) "
                    f"created concurrently, retrying (attempt {attempt})"
                )
                if attempt == self.MAX_ATTEMPTS:
                    raise

    async def ensure_at_least(self, tenant_id: str, document_type: DocumentType, value: int) -> None:
        """
        Raise the counter to `value` if it is currently lower

        Args:
            tenant_id: Tenant identifier
            document_type: Document kind
            value: Minimum counter value after the call
        """
        stmt = (
            update(ReferenceCounter)
            .where(
                and_(
                    ReferenceCounter.tenant_id == tenant_id,
                    ReferenceCounter.document_type == document_type,
                    ReferenceCounter.value < value,
                )
            )
            .values(value=value, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount:
            return

        current = await self._current_value(tenant_id, document_type)
        if current is not None:
            return

        try:
            await self._insert_counter(tenant_id, document_type, value)
        except IntegrityError:
            # Row appeared meanwhile; apply the conditional raise to it
            await self.session.execute(stmt)

    async def _increment(self, tenant_id: str, document_type: DocumentType) -> Optional[int]:
        stmt = (
            update(ReferenceCounter)
            .where(
                and_(
                    ReferenceCounter.tenant_id == tenant_id,
                    ReferenceCounter.document_type == document_type,
                )
            )
            .values(value=ReferenceCounter.value + 1, updated_at=datetime.utcnow())
            .returning(ReferenceCounter.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _current_value(self, tenant_id: str, document_type: DocumentType) -> Optional[int]:
        stmt = select(ReferenceCounter.value).where(
            and_(
                ReferenceCounter.tenant_id == tenant_id,
                ReferenceCounter.document_type == document_type,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _insert_counter(self, tenant_id: str, document_type: DocumentType, value: int) -> None:
        async with self.session.begin_nested():
            self.session.add(
                ReferenceCounter(tenant_id=tenant_id, document_type=document_type, value=value)
            )
