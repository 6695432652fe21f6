"""
Registro de notificaciones enviadas

Un único registro por par (cliente, vehículo); se actualiza en cada envío
para saber qué canales ya se usaron.
"""
import enum

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import IdMixin, TimestampMixin


class NotificationType(str, enum.Enum):
    SERVICE_REMINDER = "service_reminder"
    SERVICE_OVERDUE = "service_overdue"
    PAYMENT_REMINDER = "payment_reminder"
    GENERAL = "general"


class NotificationPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationStatus(str, enum.Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class Notification(Base, IdMixin, TimestampMixin):
    __tablename__ = "notifications"

    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(Uuid, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(30), nullable=False, default=NotificationType.SERVICE_REMINDER.value)
    title = Column(String(200), nullable=False, default="")
    message = Column(Text, nullable=False, default="")
    email_sent = Column(Boolean, nullable=False, default=False)
    email_sent_at = Column(DateTime(timezone=True), nullable=True)
    whatsapp_sent = Column(Boolean, nullable=False, default=False)
    whatsapp_sent_at = Column(DateTime(timezone=True), nullable=True)
    due_date = Column(Date, nullable=True)
    priority = Column(String(10), nullable=False, default=NotificationPriority.MEDIUM.value)
    status = Column(String(10), nullable=False, default=NotificationStatus.PENDING.value)
    error = Column(Text, nullable=True)

    customer = relationship("Customer", back_populates="notifications")
    vehicle = relationship("Vehicle")

    __table_args__ = (
        UniqueConstraint("customer_id", "vehicle_id", name="uq_notification_customer_vehicle"),
    )

    @property
    def delivered(self) -> bool:
        return bool(self.email_sent or self.whatsapp_sent)
