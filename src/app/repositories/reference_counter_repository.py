"""Reference Counter Repository Interface

Defines the contract for atomic reference number allocation.
"""

from abc import ABC, abstractmethod
from src.domain.document import DocumentType


class ReferenceCounterRepository(ABC):
    """
    Repository interface for per-tenant reference sequences

    Both operations must be atomic in the database; concurrent callers for
    the same (tenant, document type) never observe the same number.
    """

    @abstractmethod
    async def allocate_next(self, tenant_id: str, document_type: DocumentType) -> int:
        """
        Increment the counter and return the new value

        The first allocation for a fresh (tenant, document type) returns 1.

        Args:
            tenant_id: Tenant identifier
            document_type: Document kind

        Returns:
            Newly allocated sequence number
        """
        pass

    @abstractmethod
    async def ensure_at_least(self, tenant_id: str, document_type: DocumentType, value: int) -> None:
        """
        Raise the counter to `value` if it is currently lower

        Called when a document is saved with a caller-supplied reference so
        that later allocations stay above it.
        """
        pass
