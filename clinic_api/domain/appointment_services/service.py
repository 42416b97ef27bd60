"""Appointment-service link service - which services an appointment includes"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import transaction
from ...errors import ConflictError, NotFoundError, ValidationError
from ...models import AppointmentServiceLink, Service, User
from ..appointments.repository import AppointmentRepository
from ..catalog.repository import CatalogRepository
from .repository import ServiceLinkRepository
from .schemas import AppointmentServiceCreate, AppointmentServiceUpdate

logger = logging.getLogger(__name__)


class ServiceLinkService:
    def __init__(
        self,
        db: AsyncSession,
        repo: Optional[ServiceLinkRepository] = None,
        appointment_repo: Optional[AppointmentRepository] = None,
        catalog_repo: Optional[CatalogRepository] = None,
    ):
        self.db = db
        self.repo = repo or ServiceLinkRepository()
        self.appointment_repo = appointment_repo or AppointmentRepository()
        self.catalog_repo = catalog_repo or CatalogRepository()

    async def get_links(self) -> list[AppointmentServiceLink]:
        return await self.repo.get_links(self.db)

    async def get_link(self, appointment_id: int, service_id: int) -> AppointmentServiceLink:
        link = await self.repo.get_link(self.db, appointment_id, service_id)
        if not link:
            raise NotFoundError(
                f"Service {service_id} is not linked to appointment {appointment_id}"
            )
        return link

    async def _ensure_appointment(self, appointment_id: int) -> None:
        if not await self.appointment_repo.get_appointment_by_id(self.db, appointment_id):
            raise ValidationError(f"appointment_id {appointment_id} does not reference an existing appointment")

    async def _resolve_service(self, service_id: int, field: str = "service_id") -> Service:
        service = await self.catalog_repo.get_service_by_id(self.db, service_id)
        if not service:
            raise ValidationError(f"{field} {service_id} does not reference an existing service")
        return service

    async def _ensure_unlinked(self, appointment_id: int, service_id: int) -> None:
        if await self.repo.get_link(self.db, appointment_id, service_id):
            logger.warning(f"⚠️ Duplicate service link ({appointment_id}, {service_id}) rejected")
            raise ConflictError(
                f"Service {service_id} is already linked to appointment {appointment_id}"
            )

    async def create_link(
        self, data: AppointmentServiceCreate, current_user: Optional[User] = None
    ) -> AppointmentServiceLink:
        await self._ensure_appointment(data.appointment_id)
        service = await self._resolve_service(data.service_id)
        await self._ensure_unlinked(data.appointment_id, data.service_id)

        try:
            async with transaction(self.db):
                await self.repo.create_link(
                    self.db,
                    appointment_id=data.appointment_id,
                    service_id=service.id,
                    quantity=data.quantity,
                    unit_price=service.price,
                )
        except IntegrityError as e:
            raise ConflictError(
                f"Service {data.service_id} is already linked to appointment {data.appointment_id}"
            ) from e

        actor = current_user.id if current_user else "system"
        logger.info(
            f"🔗 Linked service {data.service_id} to appointment {data.appointment_id} by {actor}"
        )
        return await self.get_link(data.appointment_id, data.service_id)

    async def update_link(
        self,
        appointment_id: int,
        service_id: int,
        data: AppointmentServiceUpdate,
        current_user: Optional[User] = None,
    ) -> AppointmentServiceLink:
        """Point an existing link at another service and refresh its price snapshot"""
        link = await self.get_link(appointment_id, service_id)
        new_service = await self._resolve_service(data.new_service_id, "new_service_id")
        if new_service.id != service_id:
            await self._ensure_unlinked(appointment_id, new_service.id)

        try:
            async with transaction(self.db):
                await self.repo.update_link(
                    self.db,
                    link,
                    service_id=new_service.id,
                    unit_price=new_service.price,
                    quantity=data.quantity,
                )
        except IntegrityError as e:
            raise ConflictError(
                f"Service {new_service.id} is already linked to appointment {appointment_id}"
            ) from e

        actor = current_user.id if current_user else "system"
        logger.info(
            f"✏️ Appointment {appointment_id} service link {service_id} -> {new_service.id} by {actor}"
        )
        return await self.get_link(appointment_id, new_service.id)

    async def delete_link(
        self, appointment_id: int, service_id: int, current_user: Optional[User] = None
    ) -> None:
        link = await self.get_link(appointment_id, service_id)
        async with transaction(self.db):
            await self.repo.delete_link(self.db, link)

        actor = current_user.id if current_user else "system"
        logger.info(f"🗑️ Unlinked service {service_id} from appointment {appointment_id} by {actor}")
