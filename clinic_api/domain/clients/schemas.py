"""Client domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_phone_number, validate_required_text


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    firstName: str
    middleName: str
    lastName: str
    emergencyNumber: str
    birthDate: date
    totalAppointments: int = Field(default=0, ge=0)
    userId: Optional[int] = Field(default=None, gt=0)

    @field_validator("firstName", "middleName", "lastName")
    @classmethod
    def validate_names(cls, v, info):
        return validate_required_text(v, info.field_name)

    @field_validator("emergencyNumber")
    @classmethod
    def validate_emergency_number(cls, v):
        return validate_phone_number(v)


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    firstName: str
    middleName: str
    lastName: str
    fullName: str
    emergencyNumber: str
    birthDate: date
    totalAppointments: int
    userId: Optional[int] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientDropdownItem(BaseModel):
    """Compact projection for select inputs"""

    id: int
    fullName: str
    emergencyNumber: str
