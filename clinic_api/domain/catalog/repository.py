"""Catalog repository - Database operations for services and supplies"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Service, Supply
from ...shared.soft_delete import active, soft_delete


class CatalogRepository:
    """Repository for service and supply database operations"""

    # Services
    @staticmethod
    async def get_services(db: AsyncSession) -> list[Service]:
        result = await db.execute(select(Service).where(active(Service)).order_by(Service.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_service_by_id(db: AsyncSession, service_id: int) -> Optional[Service]:
        result = await db.execute(select(Service).where(Service.id == service_id, active(Service)))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_services_by_ids(db: AsyncSession, service_ids: list[int]) -> list[Service]:
        """Non-deleted services among `service_ids`"""
        if not service_ids:
            return []
        result = await db.execute(
            select(Service).where(Service.id.in_(service_ids), active(Service))
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_service(db: AsyncSession, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        await db.commit()
        await db.refresh(service)
        return service

    # Supplies
    @staticmethod
    async def get_supplies(db: AsyncSession) -> list[Supply]:
        result = await db.execute(select(Supply).where(active(Supply)).order_by(Supply.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_supply_by_id(db: AsyncSession, supply_id: int) -> Optional[Supply]:
        result = await db.execute(select(Supply).where(Supply.id == supply_id, active(Supply)))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_supply(db: AsyncSession, **supply_data) -> Supply:
        supply = Supply(**supply_data)
        db.add(supply)
        await db.commit()
        await db.refresh(supply)
        return supply

    @staticmethod
    async def soft_delete(db: AsyncSession, record) -> None:
        """Mark a service or supply deleted and commit"""
        soft_delete(record)
        await db.commit()
