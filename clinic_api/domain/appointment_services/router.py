"""Appointment-service link router"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth import get_current_user
from ...database import get_db
from ...models import AppointmentServiceLink, User
from ...shared.dates import format_clinic_date
from ...shared.responses import Envelope, success
from .schemas import AppointmentServiceCreate, AppointmentServiceResponse, AppointmentServiceUpdate
from .service import ServiceLinkService

router = APIRouter(prefix="/appointment-services", tags=["Appointment Services"])


def get_service_link_service(db: AsyncSession = Depends(get_db)) -> ServiceLinkService:
    """Dependency injection for ServiceLinkService"""
    return ServiceLinkService(db)


def to_service_link_response(link: AppointmentServiceLink) -> AppointmentServiceResponse:
    appointment = link.appointment
    return AppointmentServiceResponse(
        id=link.id,
        appointment_id=link.appointment_id,
        service_id=link.service_id,
        serviceName=link.service.name if link.service else None,
        appointmentDate=format_clinic_date(appointment.appointment_date) if appointment else None,
        appointmentTime=appointment.appointment_time if appointment else None,
        quantity=link.quantity,
        unitPrice=link.unit_price,
        createdAt=link.created_at,
        updatedAt=link.updated_at,
    )


@router.get("", response_model=Envelope[list[AppointmentServiceResponse]])
async def get_appointment_services(
    current_user: User = Depends(get_current_user),
    service: ServiceLinkService = Depends(get_service_link_service),
):
    links = await service.get_links()
    return success([to_service_link_response(link) for link in links])


@router.get("/{appointment_id}/{service_id}", response_model=Envelope[AppointmentServiceResponse])
async def get_appointment_service(
    appointment_id: int,
    service_id: int,
    current_user: User = Depends(get_current_user),
    service: ServiceLinkService = Depends(get_service_link_service),
):
    link = await service.get_link(appointment_id, service_id)
    return success(to_service_link_response(link))


@router.post("", response_model=Envelope[AppointmentServiceResponse], status_code=201)
async def create_appointment_service(
    data: AppointmentServiceCreate,
    current_user: User = Depends(get_current_user),
    service: ServiceLinkService = Depends(get_service_link_service),
):
    link = await service.create_link(data, current_user)
    return success(to_service_link_response(link), "Service added to appointment")


@router.put("/{appointment_id}/{service_id}", response_model=Envelope[AppointmentServiceResponse])
async def update_appointment_service(
    appointment_id: int,
    service_id: int,
    data: AppointmentServiceUpdate,
    current_user: User = Depends(get_current_user),
    service: ServiceLinkService = Depends(get_service_link_service),
):
    link = await service.update_link(appointment_id, service_id, data, current_user)
    return success(to_service_link_response(link), "Appointment service updated")


@router.delete("/{appointment_id}/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment_service(
    appointment_id: int,
    service_id: int,
    current_user: User = Depends(get_current_user),
    service: ServiceLinkService = Depends(get_service_link_service),
):
    await service.delete_link(appointment_id, service_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
