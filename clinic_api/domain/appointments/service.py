"""Scheduling service - Business logic for appointments"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...database import transaction
from ...errors import NotFoundError, ValidationError
from ...models import Appointment, Service, User
from ...shared.dates import normalize_to_clinic_day, utc_now
from ..catalog.repository import CatalogRepository
from ..clients.repository import ClientRepository
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate
from .status import ensure_transition

logger = logging.getLogger(__name__)


class SchedulingService:
    """Service layer for appointment business logic"""

    def __init__(
        self,
        db: AsyncSession,
        repo: Optional[AppointmentRepository] = None,
        client_repo: Optional[ClientRepository] = None,
        catalog_repo: Optional[CatalogRepository] = None,
    ):
        self.db = db
        self.repo = repo or AppointmentRepository()
        self.client_repo = client_repo or ClientRepository()
        self.catalog_repo = catalog_repo or CatalogRepository()

    async def get_appointments(self) -> list[Appointment]:
        """Get all non-deleted appointments"""
        return await self.repo.get_appointments(self.db)

    async def get_appointment(self, appointment_id: int) -> Appointment:
        """Get a specific appointment"""
        appointment = await self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    async def _ensure_client(self, client_id: int) -> None:
        client = await self.client_repo.get_client_by_id(self.db, client_id)
        if not client:
            logger.warning(f"⚠️ Appointment rejected: client {client_id} not found")
            raise ValidationError(f"client {client_id} does not reference an existing client")

    async def _resolve_services(self, service_ids: list[int]) -> list[Service]:
        """Load services in request order; every id must resolve"""
        found = {s.id: s for s in await self.catalog_repo.get_services_by_ids(self.db, service_ids)}
        missing = [sid for sid in service_ids if sid not in found]
        if missing:
            logger.warning(f"⚠️ Appointment rejected: services {missing} not found")
            raise ValidationError(
                f"services contains ids that do not reference an existing service: {missing}"
            )
        return [found[sid] for sid in service_ids]

    async def create_appointment(
        self, data: AppointmentCreate, current_user: Optional[User] = None
    ) -> Appointment:
        """
        Create an appointment and its service links in one transaction.

        The client and every service are resolved before anything is written.
        """
        await self._ensure_client(data.client)
        services = await self._resolve_services(data.services)
        appointment_date = normalize_to_clinic_day(data.appointmentDate)

        async with transaction(self.db):
            appointment = await self.repo.add_appointment(
                self.db,
                appointment_date=appointment_date,
                appointment_time=data.appointmentTime,
                client_id=data.client,
                status=data.status.value,
            )
            await self.repo.link_services(self.db, appointment.id, services)

        actor = current_user.id if current_user else "system"
        logger.info(
            f"📅 Created appointment {appointment.id} for client {data.client} "
            f"with services {data.services} by {actor}"
        )
        return await self.get_appointment(appointment.id)

    async def update_appointment(
        self, appointment_id: int, data: AppointmentUpdate, current_user: Optional[User] = None
    ) -> Appointment:
        """Apply the provided fields; a new services list replaces the linked set"""
        appointment = await self.get_appointment(appointment_id)

        updates = {}
        if data.appointmentDate is not None:
            updates["appointment_date"] = normalize_to_clinic_day(data.appointmentDate)
        if data.appointmentTime is not None:
            updates["appointment_time"] = data.appointmentTime
        if data.client is not None and data.client != appointment.client_id:
            await self._ensure_client(data.client)
            updates["client_id"] = data.client
        if data.status is not None:
            ensure_transition(appointment.status, data.status.value)
            updates["status"] = data.status.value

        services = None
        if data.services is not None:
            services = await self._resolve_services(data.services)

        async with transaction(self.db):
            if services is not None:
                current_ids = await self.repo.get_linked_service_ids(self.db, appointment_id)
                requested_ids = [s.id for s in services]
                removed = [sid for sid in current_ids if sid not in requested_ids]
                added = [s for s in services if s.id not in current_ids]
                await self.repo.unlink_services(self.db, appointment_id, removed)
                await self.repo.link_services(self.db, appointment_id, added)
                if removed or added:
                    updates["updated_at"] = utc_now()
            await self.repo.update_appointment(self.db, appointment, **updates)

        actor = current_user.id if current_user else "system"
        logger.info(f"✏️ Appointment {appointment_id} updated by {actor}: {sorted(updates)}")
        return await self.get_appointment(appointment_id)

    async def delete_appointment(self, appointment_id: int, current_user: Optional[User] = None) -> None:
        """Soft-delete; a second delete reports not found and leaves deleted_at as it was"""
        appointment = await self.get_appointment(appointment_id)
        await self.repo.soft_delete_appointment(self.db, appointment)

        actor = current_user.id if current_user else "system"
        logger.info(f"🗑️ Appointment {appointment_id} deleted by {actor}")
