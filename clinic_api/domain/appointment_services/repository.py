"""Appointment-service link repository"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ...models import Appointment, AppointmentServiceLink
from ...shared.soft_delete import active


def _with_relations(query):
    """Links of soft-deleted appointments are hidden along with the appointment"""
    query = query.join(Appointment, AppointmentServiceLink.appointment_id == Appointment.id).where(
        active(Appointment)
    )
    return query.options(
        selectinload(AppointmentServiceLink.appointment),
        selectinload(AppointmentServiceLink.service),
    ).execution_options(populate_existing=True)


class ServiceLinkRepository:
    """Links are hard-deleted; only the appointment soft-delete filter applies"""

    @staticmethod
    async def get_links(db: AsyncSession) -> list[AppointmentServiceLink]:
        result = await db.execute(
            _with_relations(select(AppointmentServiceLink).order_by(AppointmentServiceLink.id))
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_link(
        db: AsyncSession, appointment_id: int, service_id: int
    ) -> Optional[AppointmentServiceLink]:
        result = await db.execute(
            _with_relations(
                select(AppointmentServiceLink).where(
                    AppointmentServiceLink.appointment_id == appointment_id,
                    AppointmentServiceLink.service_id == service_id,
                )
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_link(db: AsyncSession, **link_data) -> AppointmentServiceLink:
        """Stage a link; the caller commits"""
        link = AppointmentServiceLink(**link_data)
        db.add(link)
        await db.flush()
        return link

    @staticmethod
    async def update_link(
        db: AsyncSession, link: AppointmentServiceLink, **updates
    ) -> AppointmentServiceLink:
        for key, value in updates.items():
            if value is not None and hasattr(link, key):
                setattr(link, key, value)
        await db.flush()
        return link

    @staticmethod
    async def delete_link(db: AsyncSession, link: AppointmentServiceLink) -> None:
        await db.delete(link)
        await db.flush()
