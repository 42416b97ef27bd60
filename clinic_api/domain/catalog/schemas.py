"""Catalog schemas - services offered and supplies on hand"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_required_text


class ServiceCreate(BaseModel):
    name: str
    price: float = Field(gt=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return validate_required_text(v, "Service name")


class ServiceResponse(BaseModel):
    id: int
    name: str
    price: float
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class ServiceDropdownItem(BaseModel):
    id: int
    name: str
    price: float


class SupplyCreate(BaseModel):
    name: str
    quantity: int = Field(ge=0)
    expirationDate: date
    price: float = Field(gt=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return validate_required_text(v, "Supply name")


class SupplyResponse(BaseModel):
    id: int
    name: str
    quantity: int
    expirationDate: date
    price: float
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True
