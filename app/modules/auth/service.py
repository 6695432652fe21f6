from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from datetime import datetime, timedelta, timezone
from typing import Tuple
from uuid import UUID
import logging

from app.core.config import settings
from app.common.dates import as_utc
from app.common.permissions import Role
from app.modules.auth.models import User, RefreshToken
from app.modules.auth.schemas import UserCreate
from app.modules.auth.utils import (
    hash_password, verify_password, generate_otp, hash_token,
    create_access_token, create_refresh_token, verify_token
)
from app.modules.email.service import EmailService

logger = logging.getLogger(__name__)

PUBLIC_SIGNUP_ROLES = {
    "Supervisor": "Supervisor",
    "Technician": "Technician",
    "Cashier": "Cashier",
    "staff": "Supervisor",
    "technician": "Technician",
    "cashier": "Cashier",
}


class AuthService:
    """Servicio de autenticación: registro, OTPs, login y refresh tokens."""

    def __init__(self, db: Session, email_service: EmailService = None):
        self.db = db
        self.email_service = email_service

    def _error(self, status_code: int, message: str, **extra) -> HTTPException:
        return HTTPException(status_code=status_code, detail={"error": message, **extra})

    def _issue_otp(self) -> Tuple[str, str, datetime]:
        otp = generate_otp()
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.OTP_EXPIRE_MINUTES)
        return otp, hash_token(otp), expires_at

    def _otp_matches(self, stored_hash: str, expires_at: datetime, otp: str) -> bool:
        if not stored_hash or not expires_at:
            return False
        if as_utc(expires_at) <= datetime.now(timezone.utc):
            return False
        return stored_hash == hash_token(otp)

    def _get_by_email(self, email: str) -> User:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def _get_user_or_404(self, user_id: UUID) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise self._error(status.HTTP_404_NOT_FOUND, "User not found")
        return user

    def create_user(self, user_data: UserCreate) -> Tuple[User, bool]:
        """
        Registrar usuario. El primer usuario del sistema es Admin; el resto
        elige Supervisor, Technician o Cashier (por defecto Technician).
        """
        email = user_data.email.lower()
        if self._get_by_email(email):
            raise self._error(status.HTTP_400_BAD_REQUEST, "User already exists")

        is_first_user = self.db.query(User).count() == 0
        if is_first_user:
            role = Role.ADMIN.value
            logger.info(f"First user {email} registered as Admin")
        else:
            role = PUBLIC_SIGNUP_ROLES.get(user_data.role or "", Role.TECHNICIAN.value)

        otp, otp_hash, expires_at = self._issue_otp()
        user = User(
            name=user_data.name,
            email=email,
            password=hash_password(user_data.password),
            role=role,
            is_email_verified=False,
            verification_otp=otp_hash,
            verification_otp_expires_at=expires_at,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        sent = self.email_service.send_otp_email(
            user.email, user.name, otp, "verification", settings.OTP_EXPIRE_MINUTES
        )
        if not sent:
            self.db.delete(user)
            self.db.commit()
            raise self._error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Email failed, please try again")

        logger.debug(f"Verification OTP for {user.email}: {otp}")
        return user, is_first_user

    def send_verification_otp(self, email: str) -> User:
        user = self._get_by_email(email)
        if not user:
            raise self._error(status.HTTP_404_NOT_FOUND, "User not found")
        if user.is_email_verified:
            raise self._error(status.HTTP_400_BAD_REQUEST, "Email already verified")

        otp, otp_hash, expires_at = self._issue_otp()
        user.verification_otp = otp_hash
        user.verification_otp_expires_at = expires_at
        self.db.commit()

        if not self.email_service.send_otp_email(user.email, user.name, otp, "verification", settings.OTP_EXPIRE_MINUTES):
            user.verification_otp = None
            user.verification_otp_expires_at = None
            self.db.commit()
            raise self._error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Email failed, please try again")
        return user

    def verify_email(self, user_id: UUID, otp: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user or not self._otp_matches(user.verification_otp, user.verification_otp_expires_at, otp):
            raise self._error(status.HTTP_400_BAD_REQUEST, "Invalid or expired OTP")

        user.is_email_verified = True
        user.verification_otp = None
        user.verification_otp_expires_at = None
        self.db.commit()
        return user

    def login(self, email: str, password: str) -> Tuple[User, str, str]:
        """
        Login de usuario. Devuelve (user, access_token, refresh_token).
        """
        user = self._get_by_email(email)
        if not user or not verify_password(password, user.password):
            raise self._error(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

        if not user.is_active:
            raise self._error(status.HTTP_403_FORBIDDEN, "Account is deactivated. Please contact administrator.")

        if not user.is_email_verified:
            raise self._error(
                status.HTTP_403_FORBIDDEN,
                "Please verify your email first",
                requiresVerification=True,
                userId=str(user.id),
            )

        user.last_login = datetime.now(timezone.utc)
        access_token, refresh_token = self._issue_tokens(user)
        self.db.commit()
        return user, access_token, refresh_token

    def _issue_tokens(self, user: User) -> Tuple[str, str]:
        access_token = create_access_token({"sub": str(user.id), "role": user.role})
        refresh_token, expires_at = create_refresh_token(str(user.id))
        self.db.add(RefreshToken(user_id=user.id, token_hash=hash_token(refresh_token), expires_at=expires_at))
        return access_token, refresh_token

    def refresh_access_token(self, refresh_token: str) -> Tuple[User, str, str]:
        """Rotar el refresh token: el anterior queda revocado."""
        payload = verify_token(refresh_token, "refresh")
        stored = self.db.query(RefreshToken).filter(
            RefreshToken.token_hash == hash_token(refresh_token)
        ).first()
        if not stored or stored.revoked or str(stored.user_id) != payload["sub"]:
            raise self._error(status.HTTP_401_UNAUTHORIZED, "Invalid refresh token")

        user = stored.user
        if not user.is_active:
            raise self._error(status.HTTP_401_UNAUTHORIZED, "Invalid refresh token")

        stored.revoked = True
        access_token, new_refresh_token = self._issue_tokens(user)
        self.db.commit()
        return user, access_token, new_refresh_token

    def request_password_reset(self, email: str) -> User:
        user = self._get_by_email(email)
        if not user:
            raise self._error(status.HTTP_404_NOT_FOUND, "User not found")

        otp, otp_hash, expires_at = self._issue_otp()
        user.password_reset_otp = otp_hash
        user.password_reset_otp_expires_at = expires_at
        self.db.commit()

        if not self.email_service.send_otp_email(user.email, user.name, otp, "reset", settings.OTP_EXPIRE_MINUTES):
            user.password_reset_otp = None
            user.password_reset_otp_expires_at = None
            self.db.commit()
            raise self._error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Email failed, please try again")

        logger.debug(f"Password reset OTP for {user.email}: {otp}")
        return user

    def reset_password(self, user_id: UUID, otp: str, new_password: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user or not self._otp_matches(user.password_reset_otp, user.password_reset_otp_expires_at, otp):
            raise self._error(status.HTTP_400_BAD_REQUEST, "Invalid or expired OTP")

        user.password = hash_password(new_password)
        user.password_reset_otp = None
        user.password_reset_otp_expires_at = None
        self.revoke_refresh_tokens(user)
        self.db.commit()
        return user

    def revoke_refresh_tokens(self, user: User):
        self.db.query(RefreshToken).filter(RefreshToken.user_id == user.id).delete(synchronize_session=False)

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
        user.password = hash_password(new_password)
        self.db.commit()

    def delete_user(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()
