from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.common.schemas import CamelModel
from app.common.validators import clean_phone, validate_phone


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _check_phone(v):
    if v is None:
        return v
    if not validate_phone(v):
        raise ValueError('Invalid phone number')
    return clean_phone(v)


class CustomerBase(CamelModel):
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('email', mode='before')
    @classmethod
    def empty_email(cls, v):
        return _blank_to_none(v)


class CustomerCreate(CustomerBase):
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=30)

    @field_validator('phone')
    @classmethod
    def validate_phone_number(cls, v):
        return _check_phone(v)


class CustomerUpdate(CustomerBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    is_active: Optional[bool] = None

    @field_validator('phone')
    @classmethod
    def validate_phone_number(cls, v):
        return _check_phone(v)


class CustomerOut(CamelModel):
    id: UUID
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CustomerSummary(CamelModel):
    """Datos del cliente embebidos en vehículos, trabajos y facturas"""
    id: UUID
    name: str
    phone: str
    email: Optional[str] = None
