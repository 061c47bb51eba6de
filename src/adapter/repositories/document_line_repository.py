"""SQLAlchemy Document Line Repository Implementation

Implements document line persistence using SQLAlchemy async session.
"""

from typing import List
from sqlmodel import select, delete
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document_line import DocumentLine


class SqlAlchemyDocumentLineRepository(DocumentLineRepository):
    """SQLAlchemy implementation of DocumentLineRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: int) -> List[DocumentLine]:
        """
        Retrieve all lines of a document ordered by position

        Args:
            document_id: SalesDocument ID

        Returns:
            List of DocumentLine items
        """
        stmt = (
            select(DocumentLine)
            .where(DocumentLine.document_id == document_id)
            .order_by(DocumentLine.position.asc(), DocumentLine.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_many(self, lines: List[DocumentLine]) -> List[DocumentLine]:
        """
        Persist several lines in one flush

        Args:
            lines: DocumentLine entities to persist

        Returns:
            Created lines with generated IDs
        """
        if not lines:
            return []

        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines

    async def delete_by_document_id(self, document_id: int) -> None:
        stmt = delete(DocumentLine).where(DocumentLine.document_id == document_id)
        await self.session.execute(stmt)
        await self.session.flush()
