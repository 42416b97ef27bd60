"""Appointment-supply link service - supplies consumed by an appointment"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import transaction
from ...errors import ConflictError, NotFoundError, ValidationError
from ...models import AppointmentSupplyLink, User
from ..appointments.repository import AppointmentRepository
from ..catalog.repository import CatalogRepository
from .repository import SupplyLinkRepository
from .schemas import AppointmentSupplyCreate, AppointmentSupplyUpdate

logger = logging.getLogger(__name__)


class SupplyLinkService:
    """
    Supply usage per appointment.

    Links are soft-deleted. Re-adding a supply whose link was deleted revives
    that row with the new quantity. Supply stock is never adjusted here.
    """

    def __init__(
        self,
        db: AsyncSession,
        repo: Optional[SupplyLinkRepository] = None,
        appointment_repo: Optional[AppointmentRepository] = None,
        catalog_repo: Optional[CatalogRepository] = None,
    ):
        self.db = db
        self.repo = repo or SupplyLinkRepository()
        self.appointment_repo = appointment_repo or AppointmentRepository()
        self.catalog_repo = catalog_repo or CatalogRepository()

    async def get_links(self, include_deleted: bool = False) -> list[AppointmentSupplyLink]:
        return await self.repo.get_links(self.db, include_deleted=include_deleted)

    async def get_link(self, appointment_id: int, supply_id: int) -> AppointmentSupplyLink:
        link = await self.repo.get_link(self.db, appointment_id, supply_id)
        if not link:
            raise NotFoundError(f"Supply {supply_id} is not linked to appointment {appointment_id}")
        return link

    async def _ensure_references(self, appointment_id: int, supply_id: int) -> None:
        if not await self.appointment_repo.get_appointment_by_id(self.db, appointment_id):
            raise ValidationError(f"appointment_id {appointment_id} does not reference an existing appointment")
        if not await self.catalog_repo.get_supply_by_id(self.db, supply_id):
            raise ValidationError(f"supply_id {supply_id} does not reference an existing supply")

    async def create_link(
        self, data: AppointmentSupplyCreate, current_user: Optional[User] = None
    ) -> AppointmentSupplyLink:
        await self._ensure_references(data.appointment_id, data.supply_id)

        existing = await self.repo.get_link(
            self.db, data.appointment_id, data.supply_id, include_deleted=True
        )
        if existing and not existing.is_deleted:
            logger.warning(f"⚠️ Duplicate supply link ({data.appointment_id}, {data.supply_id}) rejected")
            raise ConflictError(
                f"Supply {data.supply_id} is already linked to appointment {data.appointment_id}"
            )

        try:
            async with transaction(self.db):
                if existing:
                    await self.repo.revive_link(self.db, existing, data.quantityUsed)
                else:
                    await self.repo.create_link(
                        self.db,
                        appointment_id=data.appointment_id,
                        supply_id=data.supply_id,
                        quantity_used=data.quantityUsed,
                    )
        except IntegrityError as e:
            raise ConflictError(
                f"Supply {data.supply_id} is already linked to appointment {data.appointment_id}"
            ) from e

        actor = current_user.id if current_user else "system"
        action = "Restored" if existing else "Linked"
        logger.info(
            f"🧴 {action} supply {data.supply_id} on appointment {data.appointment_id} "
            f"(quantity {data.quantityUsed}) by {actor}"
        )
        return await self.get_link(data.appointment_id, data.supply_id)

    async def update_link(
        self,
        appointment_id: int,
        supply_id: int,
        data: AppointmentSupplyUpdate,
        current_user: Optional[User] = None,
    ) -> AppointmentSupplyLink:
        link = await self.get_link(appointment_id, supply_id)
        async with transaction(self.db):
            await self.repo.update_quantity(self.db, link, data.quantityUsed)

        actor = current_user.id if current_user else "system"
        logger.info(
            f"✏️ Supply {supply_id} on appointment {appointment_id} set to {data.quantityUsed} by {actor}"
        )
        return await self.get_link(appointment_id, supply_id)

    async def delete_link(
        self, appointment_id: int, supply_id: int, current_user: Optional[User] = None
    ) -> None:
        link = await self.get_link(appointment_id, supply_id)
        async with transaction(self.db):
            await self.repo.soft_delete_link(self.db, link)

        actor = current_user.id if current_user else "system"
        logger.info(f"🗑️ Supply {supply_id} removed from appointment {appointment_id} by {actor}")
