"""Recurring appointment schemas"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_date_string, validate_required_text
from ..appointments.schemas import AppointmentStatus


class RecurrenceInterval(str, Enum):
    weekly = "weekly"
    monthly = "monthly"


class RecurringAppointmentCreate(BaseModel):
    client: int = Field(gt=0)
    startDate: str
    startTime: str
    interval: RecurrenceInterval
    duration: int = Field(gt=0)  # Minutes
    status: AppointmentStatus = AppointmentStatus.pending

    @field_validator("startDate")
    @classmethod
    def validate_start_date(cls, v):
        return validate_date_string(v, "startDate")

    @field_validator("startTime")
    @classmethod
    def validate_start_time(cls, v):
        return validate_required_text(v, "startTime")


class RecurringAppointmentUpdate(BaseModel):
    client: Optional[int] = Field(default=None, gt=0)
    startDate: Optional[str] = None
    startTime: Optional[str] = None
    interval: Optional[RecurrenceInterval] = None
    duration: Optional[int] = Field(default=None, gt=0)
    status: Optional[AppointmentStatus] = None

    @field_validator("startDate")
    @classmethod
    def validate_start_date(cls, v):
        if v is None:
            return v
        return validate_date_string(v, "startDate")

    @field_validator("startTime")
    @classmethod
    def validate_start_time(cls, v):
        if v is None:
            return v
        return validate_required_text(v, "startTime")


class RecurringAppointmentResponse(BaseModel):
    id: int
    client: Optional[int]
    fullName: str
    startDate: str
    startTime: str
    interval: RecurrenceInterval
    duration: int
    status: AppointmentStatus
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True
