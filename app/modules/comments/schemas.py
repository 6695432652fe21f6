from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.common.permissions import Role
from app.common.schemas import CamelModel


class AttachmentType(str, Enum):
    IMAGE = "image"
    FILE = "file"


class Attachment(CamelModel):
    name: str = Field(..., min_length=1)
    type: AttachmentType = AttachmentType.FILE
    url: Optional[str] = None


class CommentCreate(CamelModel):
    job: UUID
    text: str = Field(..., min_length=1)
    author: Optional[str] = None
    author_initials: Optional[str] = Field(None, max_length=5)
    role: Optional[Role] = None
    attachments: List[Attachment] = []

    @field_validator('text')
    @classmethod
    def strip_text(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Comment text is required')
        return v


class CommentOut(CamelModel):
    id: UUID
    job_id: UUID
    author: str
    author_initials: str
    role: str
    text: str
    attachments: List[Attachment] = []
    created_at: datetime
