"""Appointment router - FastAPI endpoints for appointment operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth import get_current_user
from ...database import get_db
from ...models import Appointment, User
from ...shared.dates import format_clinic_date
from ...shared.responses import Envelope, success
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate, ServiceSummary
from .service import SchedulingService

router = APIRouter(prefix="/appointments", tags=["Appointments"])

CLIENT_UNAVAILABLE = "Client unavailable"
SERVICE_UNAVAILABLE = "Service unavailable"


def get_scheduling_service(db: AsyncSession = Depends(get_db)) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db)


def to_appointment_response(appointment: Appointment) -> AppointmentResponse:
    """Resolve client and service names into the flat view the calendar uses"""
    client = appointment.client
    full_name = client.full_name if client and not client.is_deleted else CLIENT_UNAVAILABLE

    services = [
        ServiceSummary(id=link.service.id, name=link.service.name, price=link.service.price)
        for link in appointment.service_links
        if link.service is not None and not link.service.is_deleted
    ]
    service_names = ", ".join(s.name for s in services) or SERVICE_UNAVAILABLE

    return AppointmentResponse(
        id=appointment.id,
        fullName=full_name or CLIENT_UNAVAILABLE,
        appointmentDate=format_clinic_date(appointment.appointment_date),
        appointmentTime=appointment.appointment_time,
        service=service_names,
        services=services,
        client=appointment.client_id,
        status=appointment.status,
        createdAt=appointment.created_at,
        updatedAt=appointment.updated_at,
    )


@router.get("", response_model=Envelope[list[AppointmentResponse]])
async def get_appointments(
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Get all non-deleted appointments"""
    appointments = await service.get_appointments()
    return success([to_appointment_response(a) for a in appointments])


@router.get("/{appointment_id}", response_model=Envelope[AppointmentResponse])
async def get_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Get a specific appointment"""
    appointment = await service.get_appointment(appointment_id)
    return success(to_appointment_response(appointment))


@router.post("", response_model=Envelope[AppointmentResponse], status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Create an appointment with its services"""
    appointment = await service.create_appointment(data, current_user)
    return success(to_appointment_response(appointment), "Appointment created")


@router.put("/{appointment_id}", response_model=Envelope[AppointmentResponse])
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Update an appointment (partial)"""
    appointment = await service.update_appointment(appointment_id, data, current_user)
    return success(to_appointment_response(appointment), "Appointment updated")


@router.delete("/{appointment_id}", response_model=Envelope[dict])
async def delete_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Soft-delete an appointment"""
    await service.delete_appointment(appointment_id, current_user)
    return success(message="Appointment deleted")
