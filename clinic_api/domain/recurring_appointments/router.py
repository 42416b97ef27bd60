"""Recurring appointment router"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth import get_current_user
from ...database import get_db
from ...models import RecurringAppointment, User
from ...shared.dates import format_clinic_date
from ...shared.responses import Envelope, success
from ..appointments.router import CLIENT_UNAVAILABLE
from .schemas import (
    RecurringAppointmentCreate,
    RecurringAppointmentResponse,
    RecurringAppointmentUpdate,
)
from .service import RecurringAppointmentService

router = APIRouter(prefix="/recurring-appointments", tags=["Recurring Appointments"])


def get_recurring_service(db: AsyncSession = Depends(get_db)) -> RecurringAppointmentService:
    """Dependency injection for RecurringAppointmentService"""
    return RecurringAppointmentService(db)


def to_recurring_response(template: RecurringAppointment) -> RecurringAppointmentResponse:
    client = template.client
    return RecurringAppointmentResponse(
        id=template.id,
        client=template.client_id,
        fullName=(client.full_name if client and not client.is_deleted else "") or CLIENT_UNAVAILABLE,
        startDate=format_clinic_date(template.start_date),
        startTime=template.start_time,
        interval=template.interval,
        duration=template.duration,
        status=template.status,
        createdAt=template.created_at,
        updatedAt=template.updated_at,
    )


@router.get("", response_model=Envelope[list[RecurringAppointmentResponse]])
async def get_recurring_appointments(
    current_user: User = Depends(get_current_user),
    service: RecurringAppointmentService = Depends(get_recurring_service),
):
    templates = await service.get_templates()
    return success([to_recurring_response(t) for t in templates])


@router.get("/{template_id}", response_model=Envelope[RecurringAppointmentResponse])
async def get_recurring_appointment(
    template_id: int,
    current_user: User = Depends(get_current_user),
    service: RecurringAppointmentService = Depends(get_recurring_service),
):
    return success(to_recurring_response(await service.get_template(template_id)))


@router.post("", response_model=Envelope[RecurringAppointmentResponse], status_code=201)
async def create_recurring_appointment(
    data: RecurringAppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: RecurringAppointmentService = Depends(get_recurring_service),
):
    template = await service.create_template(data, current_user)
    return success(to_recurring_response(template), "Recurring appointment created")


@router.put("/{template_id}", response_model=Envelope[RecurringAppointmentResponse])
async def update_recurring_appointment(
    template_id: int,
    data: RecurringAppointmentUpdate,
    current_user: User = Depends(get_current_user),
    service: RecurringAppointmentService = Depends(get_recurring_service),
):
    template = await service.update_template(template_id, data, current_user)
    return success(to_recurring_response(template), "Recurring appointment updated")


@router.delete("/{template_id}", response_model=Envelope[dict])
async def delete_recurring_appointment(
    template_id: int,
    current_user: User = Depends(get_current_user),
    service: RecurringAppointmentService = Depends(get_recurring_service),
):
    await service.delete_template(template_id, current_user)
    return success(message="Recurring appointment deleted")
