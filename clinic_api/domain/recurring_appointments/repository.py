"""Recurring appointment repository"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ...models import RecurringAppointment
from ...shared.soft_delete import active, soft_delete


class RecurringAppointmentRepository:
    @staticmethod
    async def get_templates(db: AsyncSession) -> list[RecurringAppointment]:
        result = await db.execute(
            select(RecurringAppointment)
            .where(active(RecurringAppointment))
            .options(selectinload(RecurringAppointment.client))
            .order_by(RecurringAppointment.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_template_by_id(db: AsyncSession, template_id: int) -> Optional[RecurringAppointment]:
        result = await db.execute(
            select(RecurringAppointment)
            .where(RecurringAppointment.id == template_id, active(RecurringAppointment))
            .options(selectinload(RecurringAppointment.client))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_template(db: AsyncSession, **template_data) -> RecurringAppointment:
        template = RecurringAppointment(**template_data)
        db.add(template)
        await db.commit()
        return template

    @staticmethod
    async def update_template(
        db: AsyncSession, template: RecurringAppointment, **updates
    ) -> RecurringAppointment:
        for key, value in updates.items():
            if value is not None and hasattr(template, key):
                setattr(template, key, value)
        await db.commit()
        return template

    @staticmethod
    async def soft_delete_template(db: AsyncSession, template: RecurringAppointment) -> None:
        soft_delete(template)
        await db.commit()
