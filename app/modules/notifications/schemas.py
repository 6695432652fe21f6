from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.common.schemas import CamelModel
from app.modules.customers.schemas import CustomerSummary
from app.modules.service_history.schemas import VehicleRef


class BulkTarget(str, Enum):
    ALL = "all"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"


class DeliveryMethod(str, Enum):
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    BOTH = "both"


class SendNotificationRequest(CamelModel):
    customer_id: UUID
    vehicle_id: UUID


class SendBulkRequest(CamelModel):
    type: BulkTarget
    method: DeliveryMethod


class ReminderVehicle(CamelModel):
    make: str
    model: str
    plate_no: str
    year: Optional[int] = None


class ReminderOut(CamelModel):
    id: UUID
    customer_id: UUID
    vehicle_id: UUID
    notification_id: Optional[UUID] = None
    type: str
    title: str
    message: str
    customer: str
    phone: str
    email: str
    vehicle: ReminderVehicle
    due_date: date
    priority: str
    status: str
    sent: bool
    email_sent: bool
    whatsapp_sent: bool
    days_until: int
    timestamp: datetime


class ServiceReminderVehicle(CamelModel):
    make: str
    model: str
    plate: str
    year: Optional[int] = None


class ServiceReminderOut(CamelModel):
    id: UUID
    customer_id: UUID
    title: str
    message: str
    customer: str
    phone: str
    vehicle: ServiceReminderVehicle
    service_type: str
    due_date: date
    days_until: int
    priority: str
    status: str
    icon: str
    timestamp: datetime


class NotificationStats(CamelModel):
    pending_reminders: int = 0
    sent_today: int = 0
    overdue_alerts: int = 0
    scheduled: int = 0


class NotificationOut(CamelModel):
    id: UUID
    customer_id: UUID
    vehicle_id: UUID
    type: str
    title: str
    message: str
    email_sent: bool
    email_sent_at: Optional[datetime] = None
    whatsapp_sent: bool
    whatsapp_sent_at: Optional[datetime] = None
    due_date: Optional[date] = None
    priority: str
    status: str
    error: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class NotificationDetailOut(NotificationOut):
    customer: Optional[CustomerSummary] = None
    vehicle: Optional[VehicleRef] = None


class BulkError(CamelModel):
    customer: str
    vehicle: str
    channel: str
    error: str


class BulkResult(CamelModel):
    total: int = 0
    email_sent: int = 0
    whatsapp_sent: int = 0
    failed: int = 0
    skipped: int = 0
    errors: List[BulkError] = Field(default_factory=list)
