"""Appointment-supply link schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AppointmentSupplyCreate(BaseModel):
    appointment_id: int = Field(gt=0)
    supply_id: int = Field(gt=0)
    quantityUsed: int = Field(ge=1)


class AppointmentSupplyUpdate(BaseModel):
    quantityUsed: int = Field(ge=1)


class AppointmentSupplyResponse(BaseModel):
    id: int
    appointment_id: int
    supply_id: int
    supplyName: Optional[str] = None
    supplyQuantity: Optional[int] = None  # Stock on hand, not reduced by usage
    appointmentDate: Optional[str] = None
    appointmentTime: Optional[str] = None
    quantityUsed: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    deletedAt: Optional[datetime] = None

    class Config:
        from_attributes = True
