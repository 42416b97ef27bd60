"""Appointment-supply link repository"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ...models import Appointment, AppointmentSupplyLink
from ...shared.soft_delete import active, restore, soft_delete


def _hide_deleted(query):
    """Drop deleted links and links of deleted appointments"""
    return query.join(Appointment, AppointmentSupplyLink.appointment_id == Appointment.id).where(
        active(AppointmentSupplyLink), active(Appointment)
    )


def _with_relations(query):
    return query.options(
        selectinload(AppointmentSupplyLink.appointment),
        selectinload(AppointmentSupplyLink.supply),
    ).execution_options(populate_existing=True)


class SupplyLinkRepository:
    @staticmethod
    async def get_links(db: AsyncSession, include_deleted: bool = False) -> list[AppointmentSupplyLink]:
        query = select(AppointmentSupplyLink).order_by(AppointmentSupplyLink.id)
        if not include_deleted:
            query = _hide_deleted(query)
        result = await db.execute(_with_relations(query))
        return list(result.scalars().all())

    @staticmethod
    async def get_link(
        db: AsyncSession, appointment_id: int, supply_id: int, include_deleted: bool = False
    ) -> Optional[AppointmentSupplyLink]:
        """The (appointment, supply) row; the pair is unique, deleted or not"""
        query = select(AppointmentSupplyLink).where(
            AppointmentSupplyLink.appointment_id == appointment_id,
            AppointmentSupplyLink.supply_id == supply_id,
        )
        if not include_deleted:
            query = _hide_deleted(query)
        result = await db.execute(_with_relations(query))
        return result.scalar_one_or_none()

    @staticmethod
    async def create_link(db: AsyncSession, **link_data) -> AppointmentSupplyLink:
        """Stage a link; the caller commits"""
        link = AppointmentSupplyLink(**link_data)
        db.add(link)
        await db.flush()
        return link

    @staticmethod
    async def revive_link(
        db: AsyncSession, link: AppointmentSupplyLink, quantity_used: int
    ) -> AppointmentSupplyLink:
        restore(link)
        link.quantity_used = quantity_used
        await db.flush()
        return link

    @staticmethod
    async def update_quantity(
        db: AsyncSession, link: AppointmentSupplyLink, quantity_used: int
    ) -> AppointmentSupplyLink:
        link.quantity_used = quantity_used
        await db.flush()
        return link

    @staticmethod
    async def soft_delete_link(db: AsyncSession, link: AppointmentSupplyLink) -> None:
        soft_delete(link)
        await db.flush()
