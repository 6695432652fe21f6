"""
Preferencias por usuario, agrupadas en secciones JSON
"""
from sqlalchemy import JSON, Column, ForeignKey, Uuid

from app.database.database import Base
from app.common.mixins import IdMixin, TimestampMixin


class UserSettings(Base, IdMixin, TimestampMixin):
    __tablename__ = "user_settings"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    workshop = Column(JSON, nullable=False, default=dict)
    tax = Column(JSON, nullable=False, default=dict)
    notifications = Column(JSON, nullable=False, default=dict)
    email = Column(JSON, nullable=False, default=dict)
    security = Column(JSON, nullable=False, default=dict)
    advanced = Column(JSON, nullable=False, default=dict)
