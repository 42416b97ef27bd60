"""Appointment-supply link router"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth import get_current_user
from ...database import get_db
from ...models import AppointmentSupplyLink, User
from ...shared.dates import format_clinic_date
from ...shared.responses import Envelope, success
from .schemas import AppointmentSupplyCreate, AppointmentSupplyResponse, AppointmentSupplyUpdate
from .service import SupplyLinkService

router = APIRouter(prefix="/appointment-supplies", tags=["Appointment Supplies"])


def get_supply_link_service(db: AsyncSession = Depends(get_db)) -> SupplyLinkService:
    """Dependency injection for SupplyLinkService"""
    return SupplyLinkService(db)


def to_supply_link_response(
    link: AppointmentSupplyLink, include_deleted: bool = False
) -> AppointmentSupplyResponse:
    appointment = link.appointment
    supply = link.supply
    return AppointmentSupplyResponse(
        id=link.id,
        appointment_id=link.appointment_id,
        supply_id=link.supply_id,
        supplyName=supply.name if supply else None,
        supplyQuantity=supply.quantity if supply else None,
        appointmentDate=format_clinic_date(appointment.appointment_date) if appointment else None,
        appointmentTime=appointment.appointment_time if appointment else None,
        quantityUsed=link.quantity_used,
        createdAt=link.created_at,
        updatedAt=link.updated_at,
        deletedAt=link.deleted_at if include_deleted else None,
    )


@router.get(
    "",
    response_model=Envelope[list[AppointmentSupplyResponse]],
    response_model_exclude_none=True,
)
async def get_appointment_supplies(
    include_deleted: bool = Query(False, description="Also return soft-deleted links"),
    current_user: User = Depends(get_current_user),
    service: SupplyLinkService = Depends(get_supply_link_service),
):
    links = await service.get_links(include_deleted=include_deleted)
    return success([to_supply_link_response(link, include_deleted) for link in links])


@router.get("/{appointment_id}/{supply_id}", response_model=Envelope[AppointmentSupplyResponse])
async def get_appointment_supply(
    appointment_id: int,
    supply_id: int,
    current_user: User = Depends(get_current_user),
    service: SupplyLinkService = Depends(get_supply_link_service),
):
    link = await service.get_link(appointment_id, supply_id)
    return success(to_supply_link_response(link))


@router.post("", response_model=Envelope[AppointmentSupplyResponse], status_code=201)
async def create_appointment_supply(
    data: AppointmentSupplyCreate,
    current_user: User = Depends(get_current_user),
    service: SupplyLinkService = Depends(get_supply_link_service),
):
    link = await service.create_link(data, current_user)
    return success(to_supply_link_response(link), "Supply added to appointment")


@router.put("/{appointment_id}/{supply_id}", response_model=Envelope[AppointmentSupplyResponse])
async def update_appointment_supply(
    appointment_id: int,
    supply_id: int,
    data: AppointmentSupplyUpdate,
    current_user: User = Depends(get_current_user),
    service: SupplyLinkService = Depends(get_supply_link_service),
):
    link = await service.update_link(appointment_id, supply_id, data, current_user)
    return success(to_supply_link_response(link), "Appointment supply updated")


@router.delete("/{appointment_id}/{supply_id}", response_model=Envelope[dict])
async def delete_appointment_supply(
    appointment_id: int,
    supply_id: int,
    current_user: User = Depends(get_current_user),
    service: SupplyLinkService = Depends(get_supply_link_service),
):
    await service.delete_link(appointment_id, supply_id, current_user)
    return success(message="Supply removed from appointment")
