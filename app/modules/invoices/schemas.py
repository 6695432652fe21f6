from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.common.dates import as_utc
from app.common.schemas import CamelModel
from app.modules.customers.schemas import CustomerSummary
from app.modules.invoices.models import InvoiceStatus, PaymentMethod
from app.modules.jobs.schemas import VehicleSnapshot


class InvoiceItem(CamelModel):
    description: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)
    price: float = Field(..., ge=0)


class InvoiceBase(CamelModel):
    job: Optional[UUID] = None
    date: Optional[datetime] = None
    vehicle: Optional[VehicleSnapshot] = None
    subtotal: Optional[float] = Field(None, ge=0)
    tax: Optional[float] = Field(None, ge=0)
    discount: Optional[float] = Field(None, ge=0)
    amount: Optional[float] = Field(None, ge=0)
    status: Optional[InvoiceStatus] = None
    payment_method: Optional[PaymentMethod] = None
    technician: Optional[str] = None
    supervisor: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_in_utc(cls, v):
        return as_utc(v) if v else v


class InvoiceCreate(InvoiceBase):
    customer: UUID
    items: List[InvoiceItem] = Field(..., min_length=1)


class InvoiceUpdate(InvoiceBase):
    items: Optional[List[InvoiceItem]] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class JobSummary(CamelModel):
    id: UUID
    title: str
    status: str
    amount: float


class InvoiceOut(CamelModel):
    id: UUID
    invoice_number: str
    customer_id: UUID
    customer: Optional[CustomerSummary] = None
    job_id: Optional[UUID] = None
    job: Optional[JobSummary] = None
    date: datetime
    vehicle: Optional[VehicleSnapshot] = None
    items: List[InvoiceItem]
    subtotal: float
    tax: float
    discount: float
    amount: float
    status: str
    payment_method: Optional[str] = None
    technician: Optional[str] = None
    supervisor: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
