"""
Modelos SQLAlchemy para el módulo de Clientes
"""
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import BaseMixin


class Customer(Base, BaseMixin):
    __tablename__ = "customers"

    name = Column(String(200), nullable=False, index=True)
    phone = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    vehicles = relationship("Vehicle", back_populates="customer", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="customer", cascade="all, delete-orphan")
