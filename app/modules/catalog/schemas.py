from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.common.schemas import CamelModel
from app.modules.catalog.models import CatalogItemType, Visibility


class SubOptionType(str, Enum):
    TEXT = "text"
    SELECT = "select"
    MULTISELECT = "multiselect"


class SubOption(CamelModel):
    key: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    type: SubOptionType = SubOptionType.TEXT
    options: List[str] = []


class CatalogItemBase(CamelModel):
    description: Optional[str] = None
    base_price: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, ge=0)
    estimated_time: Optional[str] = None
    sub_options: Optional[List[SubOption]] = None
    allow_comments: Optional[bool] = None
    allowed_parts: Optional[List[str]] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None


class CatalogItemCreate(CatalogItemBase):
    name: str = Field(..., min_length=1, max_length=200)
    type: CatalogItemType
    cost: float = Field(..., ge=0)
    visibility: Optional[Visibility] = None


class CatalogItemUpdate(CatalogItemBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[CatalogItemType] = None
    cost: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CatalogItemOut(CamelModel):
    id: UUID
    name: str
    type: str
    description: str
    cost: float
    base_price: float
    duration_minutes: int
    estimated_time: str
    sub_options: List[SubOption] = []
    allow_comments: bool
    allowed_parts: List[str] = []
    quantity: int
    unit: str
    visibility: str
    account: Optional[UUID] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
