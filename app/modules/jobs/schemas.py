from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field

from app.common.schemas import CamelModel
from app.modules.customers.schemas import CustomerSummary
from app.modules.jobs.models import JobStatus


class VehicleSnapshot(CamelModel):
    """Copia de los datos del vehículo guardada con el trabajo o la factura"""
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    plate_no: Optional[str] = None


class JobVehicle(VehicleSnapshot):
    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)


class JobBase(CamelModel):
    description: Optional[str] = None
    status: Optional[JobStatus] = None
    technician: Optional[str] = None
    estimated_time_hours: Optional[float] = Field(None, ge=0)
    amount: Optional[float] = Field(None, ge=0)
    services: Optional[List[Any]] = None
    notes: Optional[str] = None


class JobCreate(JobBase):
    customer: UUID
    vehicle: JobVehicle
    title: str = Field(..., min_length=1, max_length=200)


class JobUpdate(JobBase):
    vehicle: Optional[VehicleSnapshot] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    is_active: Optional[bool] = None


class JobOut(CamelModel):
    id: UUID
    customer_id: UUID
    customer: Optional[CustomerSummary] = None
    vehicle: VehicleSnapshot
    title: str
    description: Optional[str] = None
    status: str
    technician: Optional[str] = None
    estimated_time_hours: Optional[float] = None
    amount: float
    services: List[Any] = []
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
