"""
Modelos SQLAlchemy para el módulo de Órdenes de trabajo
"""
import enum

from sqlalchemy import JSON, Column, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import BaseMixin


class JobStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"


class Job(Base, BaseMixin):
    __tablename__ = "jobs"

    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)
    # {make, model, year, plateNo} copied at creation time
    vehicle = Column(JSON, nullable=False)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=JobStatus.PENDING.value, index=True)
    technician = Column(String(120), nullable=True)
    estimated_time_hours = Column(Numeric(8, 2), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    services = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=False, default="")

    customer = relationship("Customer")
    comments = relationship("Comment", back_populates="job")
