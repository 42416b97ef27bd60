"""Appointment-service link schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AppointmentServiceCreate(BaseModel):
    appointment_id: int = Field(gt=0)
    service_id: int = Field(gt=0)
    quantity: Optional[int] = Field(default=None, ge=1)


class AppointmentServiceUpdate(BaseModel):
    """Re-point a link to another service"""

    new_service_id: int = Field(gt=0)
    quantity: Optional[int] = Field(default=None, ge=1)


class AppointmentServiceResponse(BaseModel):
    id: int
    appointment_id: int
    service_id: int
    serviceName: Optional[str] = None
    appointmentDate: Optional[str] = None  # YYYY-MM-DD, clinic-local
    appointmentTime: Optional[str] = None
    quantity: Optional[int] = None
    unitPrice: Optional[float] = None  # Service price when the link was made
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True
