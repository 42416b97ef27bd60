"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import (
    validate_date_string,
    validate_required_text,
    validate_unique_ids,
)


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


def _single_service_to_list(data):
    """Accept the legacy single `service` id as a one-element `services` list"""
    if isinstance(data, dict) and "service" in data and "services" not in data:
        data = dict(data)
        service = data.pop("service")
        data["services"] = service if isinstance(service, list) else [service]
    return data


class AppointmentCreate(BaseModel):
    """Schema for creating an appointment"""

    appointmentDate: str
    appointmentTime: str
    client: int = Field(gt=0)
    services: list[int] = Field(min_length=1)
    status: AppointmentStatus = AppointmentStatus.pending

    @model_validator(mode="before")
    @classmethod
    def accept_single_service(cls, data):
        return _single_service_to_list(data)

    @field_validator("appointmentDate")
    @classmethod
    def validate_date(cls, v):
        return validate_date_string(v, "appointmentDate")

    @field_validator("appointmentTime")
    @classmethod
    def validate_time(cls, v):
        return validate_required_text(v, "appointmentTime")

    @field_validator("services")
    @classmethod
    def validate_services(cls, v):
        return validate_unique_ids(v, "services")


class AppointmentUpdate(BaseModel):
    """Schema for a partial appointment update; omitted fields are left unchanged"""

    appointmentDate: Optional[str] = None
    appointmentTime: Optional[str] = None
    client: Optional[int] = Field(default=None, gt=0)
    services: Optional[list[int]] = Field(default=None, min_length=1)
    status: Optional[AppointmentStatus] = None

    @model_validator(mode="before")
    @classmethod
    def accept_single_service(cls, data):
        return _single_service_to_list(data)

    @field_validator("appointmentDate")
    @classmethod
    def validate_date(cls, v):
        if v is None:
            return v
        return validate_date_string(v, "appointmentDate")

    @field_validator("appointmentTime")
    @classmethod
    def validate_time(cls, v):
        if v is None:
            return v
        return validate_required_text(v, "appointmentTime")

    @field_validator("services")
    @classmethod
    def validate_services(cls, v):
        if v is None:
            return v
        return validate_unique_ids(v, "services")


class ServiceSummary(BaseModel):
    id: int
    name: str
    price: float


class AppointmentResponse(BaseModel):
    """Denormalized appointment view with client and service names resolved"""

    id: int
    fullName: str
    appointmentDate: str  # YYYY-MM-DD, clinic-local
    appointmentTime: str
    service: str  # Service names joined with ", "
    services: list[ServiceSummary]
    client: Optional[int]
    status: AppointmentStatus
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True
