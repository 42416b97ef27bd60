"""Catalog service - services and supplies referenced by appointments"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...errors import NotFoundError
from ...models import Service, Supply
from .repository import CatalogRepository
from .schemas import ServiceCreate, SupplyCreate

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, db: AsyncSession, repo: Optional[CatalogRepository] = None):
        self.db = db
        self.repo = repo or CatalogRepository()

    async def get_services(self) -> list[Service]:
        return await self.repo.get_services(self.db)

    async def get_service(self, service_id: int) -> Service:
        service = await self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    async def create_service(self, data: ServiceCreate) -> Service:
        service = await self.repo.create_service(self.db, name=data.name, price=data.price)
        logger.info(f"📥 Created service {service.id} ({service.name})")
        return service

    async def delete_service(self, service_id: int) -> None:
        service = await self.get_service(service_id)
        await self.repo.soft_delete(self.db, service)
        logger.info(f"🗑️ Service {service_id} deleted")

    async def get_supplies(self) -> list[Supply]:
        return await self.repo.get_supplies(self.db)

    async def get_supply(self, supply_id: int) -> Supply:
        supply = await self.repo.get_supply_by_id(self.db, supply_id)
        if not supply:
            raise NotFoundError("Supply not found")
        return supply

    async def create_supply(self, data: SupplyCreate) -> Supply:
        supply = await self.repo.create_supply(
            self.db,
            name=data.name,
            quantity=data.quantity,
            expiration_date=data.expirationDate,
            price=data.price,
        )
        logger.info(f"📥 Created supply {supply.id} ({supply.name})")
        return supply

    async def delete_supply(self, supply_id: int) -> None:
        supply = await self.get_supply(supply_id)
        await self.repo.soft_delete(self.db, supply)
        logger.info(f"🗑️ Supply {supply_id} deleted")
