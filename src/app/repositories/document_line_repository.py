"""Document Line Repository Interface

Defines the contract for document line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document_line import DocumentLine


class DocumentLineRepository(ABC):
    """Repository interface for DocumentLine persistence"""

    @abstractmethod
    async def get_by_document_id(self, document_id: int) -> List[DocumentLine]:
        """
        Retrieve all lines of a document ordered by position

        Args:
            document_id: SalesDocument ID

        Returns:
            List of DocumentLine items
        """
        pass

    @abstractmethod
    async def create_many(self, lines: List[DocumentLine]) -> List[DocumentLine]:
        """
        Persist several lines at once

        Returns:
            Created lines with generated IDs
        """
        pass

    @abstractmethod
    async def delete_by_document_id(self, document_id: int) -> None:
        """Remove every line of a document"""
        pass
