"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ...models import Appointment, AppointmentServiceLink, Service
from ...shared.soft_delete import active, soft_delete


def _with_relations(query):
    """Eager-load everything the appointment projection reads"""
    return query.options(
        selectinload(Appointment.client),
        selectinload(Appointment.service_links).selectinload(AppointmentServiceLink.service),
    ).execution_options(populate_existing=True)


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    async def get_appointments(db: AsyncSession) -> list[Appointment]:
        """Get all non-deleted appointments in insertion order"""
        query = select(Appointment).where(active(Appointment)).order_by(Appointment.id)
        result = await db.execute(_with_relations(query))
        return list(result.scalars().all())

    @staticmethod
    async def get_appointment_by_id(db: AsyncSession, appointment_id: int) -> Optional[Appointment]:
        """Get a specific non-deleted appointment with client and services loaded"""
        query = select(Appointment).where(Appointment.id == appointment_id, active(Appointment))
        result = await db.execute(_with_relations(query))
        return result.scalar_one_or_none()

    @staticmethod
    async def add_appointment(db: AsyncSession, **appointment_data) -> Appointment:
        """Stage a new appointment and assign its id; the caller commits"""
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        await db.flush()
        return appointment

    @staticmethod
    async def update_appointment(db: AsyncSession, appointment: Appointment, **updates) -> Appointment:
        """Apply provided fields; the caller commits"""
        for key, value in updates.items():
            if value is not None and hasattr(appointment, key):
                setattr(appointment, key, value)
        await db.flush()
        return appointment

    @staticmethod
    async def get_linked_service_ids(db: AsyncSession, appointment_id: int) -> list[int]:
        result = await db.execute(
            select(AppointmentServiceLink.service_id)
            .where(AppointmentServiceLink.appointment_id == appointment_id)
            .order_by(AppointmentServiceLink.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def link_services(
        db: AsyncSession, appointment_id: int, services: list[Service]
    ) -> list[AppointmentServiceLink]:
        """Create one link per service, snapshotting its current price"""
        links = [
            AppointmentServiceLink(
                appointment_id=appointment_id,
                service_id=service.id,
                unit_price=service.price,
            )
            for service in services
        ]
        db.add_all(links)
        await db.flush()
        return links

    @staticmethod
    async def unlink_services(db: AsyncSession, appointment_id: int, service_ids: list[int]) -> None:
        if not service_ids:
            return
        await db.execute(
            delete(AppointmentServiceLink).where(
                AppointmentServiceLink.appointment_id == appointment_id,
                AppointmentServiceLink.service_id.in_(service_ids),
            )
        )

    @staticmethod
    async def soft_delete_appointment(db: AsyncSession, appointment: Appointment) -> Appointment:
        soft_delete(appointment)
        await db.commit()
        return appointment
