from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from uuid import uuid4
from app.database.database import Base
from app.common.mixins import TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="Technician")  # Admin, Supervisor, Technician, Cashier
    is_active = Column(Boolean, default=True, nullable=False)
    is_email_verified = Column(Boolean, default=False, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)

    # OTPs are stored as sha256 digests
    verification_otp = Column(String(64), nullable=True)
    verification_otp_expires_at = Column(DateTime(timezone=True), nullable=True)
    password_reset_otp = Column(String(64), nullable=True)
    password_reset_otp_expires_at = Column(DateTime(timezone=True), nullable=True)

    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    @property
    def status(self) -> str:
        if not self.is_email_verified:
            return "pending"
        if not self.is_active:
            return "blocked"
        return "active"


class RefreshToken(Base, TimestampMixin):
    __tablename__ = "refresh_tokens"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="refresh_tokens")
