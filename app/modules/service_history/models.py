from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import BaseMixin, utcnow


class ServiceHistory(Base, BaseMixin):
    __tablename__ = "service_history"

    vehicle_id = Column(Uuid, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True)
    service_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    description = Column(Text, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    technician = Column(String(120), nullable=True)
    mileage = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    vehicle = relationship("Vehicle")
    customer = relationship("Customer")
    job = relationship("Job")
