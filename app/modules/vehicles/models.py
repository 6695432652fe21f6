"""
Modelos SQLAlchemy para el módulo de Vehículos
"""
import enum

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import BaseMixin


class VehicleStatus(str, enum.Enum):
    ACTIVE = "Active"
    DUE = "Due"
    INACTIVE = "Inactive"


class Vehicle(Base, BaseMixin):
    __tablename__ = "vehicles"

    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    plate_no = Column(String(30), nullable=False, index=True)
    mileage = Column(Integer, nullable=False, default=0)
    last_service = Column(Date, nullable=True)
    next_service = Column(Date, nullable=True, index=True)
    oil_type = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default=VehicleStatus.ACTIVE.value)

    customer = relationship("Customer", back_populates="vehicles")

    @property
    def label(self) -> str:
        return f"{self.make} {self.model} ({self.year})"
