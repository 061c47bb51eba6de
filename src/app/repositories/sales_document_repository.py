"""Sales Document Repository Interface

Defines the contract for sales document persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, List
from src.domain.document import SalesDocument, DocumentType


@dataclass
class DocumentFilter:
    """Optional list filters; None means no constraint"""

    customer_id: Optional[int] = None
    status: Optional[str] = None
    issue_date_from: Optional[date] = None
    issue_date_to: Optional[date] = None
    due_date_from: Optional[date] = None
    due_date_to: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None


class SalesDocumentRepository(ABC):
    """
    Repository interface for SalesDocument persistence

    Reference uniqueness per (tenant, document type) is enforced by the
    storage layer; create/update raise IntegrityError on a duplicate.
    """

    @abstractmethod
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
        pass

    @abstractmethod
    async def get_by_id(
        self, tenant_id: str, document_type: DocumentType, document_id: int
    ) -> Optional[SalesDocument]:
        """
        Retrieve a document of the given tenant and type by ID

        Returns:
            SalesDocument if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        tenant_id: str,
        document_type: DocumentType,
        filters: Optional[DocumentFilter] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[SalesDocument], int]:
        """
        List documents of a tenant and type, oldest first

        Returns:
            Tuple of (page of documents, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, document: SalesDocument) -> SalesDocument:
        """
        Update an existing document

        Args:
            document: SalesDocument with updated values

        Returns:
            Updated SalesDocument
        """
        pass

    @abstractmethod
    async def delete(self, document: SalesDocument) -> None:
        """Delete a document (its lines are removed by the caller)"""
        pass

    @abstractmethod
    async def get_past_due(
        self, document_type: DocumentType, statuses: List[str], as_of: date
    ) -> List[SalesDocument]:
        """
        Retrieve documents of all tenants whose due_date is before `as_of`
        and whose status is one of `statuses`

        Used by the expiry worker.
        """
        pass
