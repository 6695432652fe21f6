from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.common.schemas import CamelModel
from app.modules.customers.schemas import CustomerSummary
from app.modules.invoices.schemas import JobSummary
from app.modules.jobs.schemas import VehicleSnapshot


class ServiceHistoryBase(CamelModel):
    job: Optional[UUID] = None
    service_date: Optional[datetime] = None
    technician: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class ServiceHistoryCreate(ServiceHistoryBase):
    vehicle: UUID
    customer: UUID
    description: str = Field(..., min_length=1)
    cost: float = Field(..., ge=0)


class ServiceHistoryUpdate(ServiceHistoryBase):
    description: Optional[str] = Field(None, min_length=1)
    cost: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class VehicleRef(VehicleSnapshot):
    id: UUID


class ServiceHistoryOut(CamelModel):
    id: UUID
    vehicle_id: UUID
    vehicle: Optional[VehicleRef] = None
    customer_id: UUID
    customer: Optional[CustomerSummary] = None
    job_id: Optional[UUID] = None
    job: Optional[JobSummary] = None
    service_date: datetime
    description: str
    cost: float
    technician: Optional[str] = None
    mileage: Optional[int] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
