"""Recurring appointment service - templates only, occurrences are never materialized"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...errors import NotFoundError, ValidationError
from ...models import RecurringAppointment, User
from ...shared.dates import normalize_to_clinic_day
from ..appointments.status import ensure_transition
from ..clients.repository import ClientRepository
from .repository import RecurringAppointmentRepository
from .schemas import RecurringAppointmentCreate, RecurringAppointmentUpdate

logger = logging.getLogger(__name__)


class RecurringAppointmentService:
    def __init__(
        self,
        db: AsyncSession,
        repo: Optional[RecurringAppointmentRepository] = None,
        client_repo: Optional[ClientRepository] = None,
    ):
        self.db = db
        self.repo = repo or RecurringAppointmentRepository()
        self.client_repo = client_repo or ClientRepository()

    async def get_templates(self) -> list[RecurringAppointment]:
        return await self.repo.get_templates(self.db)

    async def get_template(self, template_id: int) -> RecurringAppointment:
        template = await self.repo.get_template_by_id(self.db, template_id)
        if not template:
            raise NotFoundError("Recurring appointment not found")
        return template

    async def _ensure_client(self, client_id: int) -> None:
        if not await self.client_repo.get_client_by_id(self.db, client_id):
            logger.warning(f"⚠️ Recurring appointment rejected: client {client_id} not found")
            raise ValidationError(f"client {client_id} does not reference an existing client")

    async def create_template(
        self, data: RecurringAppointmentCreate, current_user: Optional[User] = None
    ) -> RecurringAppointment:
        await self._ensure_client(data.client)

        template = await self.repo.create_template(
            self.db,
            client_id=data.client,
            start_date=normalize_to_clinic_day(data.startDate),
            start_time=data.startTime,
            interval=data.interval.value,
            duration=data.duration,
            status=data.status.value,
        )
        actor = current_user.id if current_user else "system"
        logger.info(
            f"🔁 Created {template.interval} recurring appointment {template.id} "
            f"for client {data.client} by {actor}"
        )
        return await self.get_template(template.id)

    async def update_template(
        self,
        template_id: int,
        data: RecurringAppointmentUpdate,
        current_user: Optional[User] = None,
    ) -> RecurringAppointment:
        template = await self.get_template(template_id)

        updates = {
            "start_time": data.startTime,
            "duration": data.duration,
            "interval": data.interval.value if data.interval else None,
        }
        if data.startDate is not None:
            updates["start_date"] = normalize_to_clinic_day(data.startDate)
        if data.client is not None and data.client != template.client_id:
            await self._ensure_client(data.client)
            updates["client_id"] = data.client
        if data.status is not None:
            ensure_transition(template.status, data.status.value)
            updates["status"] = data.status.value

        await self.repo.update_template(self.db, template, **updates)

        actor = current_user.id if current_user else "system"
        changed = sorted(k for k, v in updates.items() if v is not None)
        logger.info(f"✏️ Recurring appointment {template_id} updated by {actor}: {changed}")
        return await self.get_template(template_id)

    async def delete_template(self, template_id: int, current_user: Optional[User] = None) -> None:
        template = await self.get_template(template_id)
        await self.repo.soft_delete_template(self.db, template)

        actor = current_user.id if current_user else "system"
        logger.info(f"🗑️ Recurring appointment {template_id} deleted by {actor}")
