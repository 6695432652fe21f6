from sqlalchemy import JSON, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import BaseMixin


class Comment(Base, BaseMixin):
    __tablename__ = "comments"

    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    author = Column(String(120), nullable=False)
    author_initials = Column(String(5), nullable=False)
    role = Column(String(20), nullable=False)
    text = Column(Text, nullable=False)
    # [{name, type: image|file, url}]
    attachments = Column(JSON, nullable=False, default=list)

    job = relationship("Job", back_populates="comments")
