"""
Modelos SQLAlchemy para el Catálogo
"""
import enum

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text, Uuid

from app.database.database import Base
from app.common.mixins import BaseMixin


class CatalogItemType(str, enum.Enum):
    SERVICE = "service"
    PRODUCT = "product"


class Visibility(str, enum.Enum):
    DEFAULT = "default"
    LOCAL = "local"


class CatalogItem(Base, BaseMixin):
    __tablename__ = "catalog_items"

    name = Column(String(200), nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    cost = Column(Numeric(12, 2), nullable=False, default=0)
    base_price = Column(Numeric(12, 2), nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False, default=0)
    estimated_time = Column(String(50), nullable=False, default="")
    # [{key, label, type: text|select|multiselect, options: []}]
    sub_options = Column(JSON, nullable=False, default=list)
    allow_comments = Column(Boolean, nullable=False, default=False)
    allowed_parts = Column(JSON, nullable=False, default=list)
    quantity = Column(Integer, nullable=False, default=0)
    unit = Column(String(30), nullable=False, default="piece")
    visibility = Column(String(10), nullable=False, default=Visibility.LOCAL.value, index=True)
    account = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    __table_args__ = (
        CheckConstraint(
            "(visibility = 'default' AND account IS NULL) OR (visibility = 'local' AND account IS NOT NULL)",
            name="ck_catalog_visibility_account",
        ),
    )
