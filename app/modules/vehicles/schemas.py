from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.common.schemas import CamelModel
from app.modules.customers.schemas import CustomerSummary
from app.modules.vehicles.models import VehicleStatus


class VehicleBase(CamelModel):
    mileage: Optional[int] = Field(None, ge=0)
    last_service: Optional[date] = None
    next_service: Optional[date] = None
    oil_type: Optional[str] = None
    status: Optional[VehicleStatus] = None


class VehicleCreate(VehicleBase):
    customer: UUID = Field(..., description="ID del cliente")
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900, le=2100)
    plate_no: str = Field(..., min_length=1, max_length=30)


class VehicleUpdate(VehicleBase):
    customer: Optional[UUID] = None
    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    plate_no: Optional[str] = Field(None, min_length=1, max_length=30)
    is_active: Optional[bool] = None


class VehicleOut(CamelModel):
    id: UUID
    customer_id: UUID
    customer: Optional[CustomerSummary] = None
    make: str
    model: str
    year: int
    plate_no: str
    mileage: int
    last_service: Optional[date] = None
    next_service: Optional[date] = None
    oil_type: Optional[str] = None
    status: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
