"""
Modelos SQLAlchemy para el módulo de Facturación
"""
import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import BaseMixin, utcnow


class InvoiceStatus(str, enum.Enum):
    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class PaymentMethod(str, enum.Enum):
    CASH = "Cash"
    CARD = "Card/POS"
    ONLINE_TRANSFER = "Online Transfer"
    CHEQUE = "Cheque"
    OTHER = "Other"


class Invoice(Base, BaseMixin):
    __tablename__ = "invoices"

    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True, index=True)
    invoice_number = Column(String(20), nullable=False, unique=True, index=True)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    vehicle = Column(JSON, nullable=True)
    # Copy of vehicle["plate_no"] so it can be searched
    plate_no = Column(String(30), nullable=True, index=True)
    # [{description, quantity, price}]
    items = Column(JSON, nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    tax = Column(Numeric(12, 2), nullable=False, default=0)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default=InvoiceStatus.PENDING.value, index=True)
    payment_method = Column(String(30), nullable=True)
    technician = Column(String(120), nullable=True)
    supervisor = Column(String(120), nullable=True)
    notes = Column(Text, nullable=True)

    customer = relationship("Customer")
    job = relationship("Job")
