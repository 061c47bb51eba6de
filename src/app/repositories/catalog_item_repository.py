"""Catalog Item Repository Interface

Read access to products and services used to seed document lines.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.catalog_item import CatalogItem


class CatalogItemRepository(ABC):
    """Repository interface for CatalogItem lookups"""

    @abstractmethod
    async def get_by_id(self, tenant_id: str, item_id: int) -> Optional[CatalogItem]:
        """
        Retrieve a catalog item of the tenant by ID

        Returns:
            CatalogItem if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, item: CatalogItem) -> CatalogItem:
        """Create a new catalog item"""
        pass
