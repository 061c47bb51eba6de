"""SQLAlchemy implementation of CatalogItemRepository"""

from typing import Optional
from sqlmodel import select, and_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.catalog_item_repository import CatalogItemRepository
from src.domain.catalog_item import CatalogItem


class SqlAlchemyCatalogItemRepository(CatalogItemRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: str, item_id: int) -> Optional[CatalogItem]:
        stmt = select(CatalogItem).where(
            and_(CatalogItem.id == item_id, CatalogItem.tenant_id == tenant_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, item: CatalogItem) -> CatalogItem:
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item
