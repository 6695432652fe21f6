from pydantic import EmailStr, Field, field_validator
from typing import Optional
from uuid import UUID

from app.common.schemas import CamelModel


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name is required')
        return v


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class EmailRequest(CamelModel):
    email: EmailStr


class VerifyEmailRequest(CamelModel):
    user_id: UUID
    otp: str = Field(..., min_length=6, max_length=6)


class ResetPasswordRequest(CamelModel):
    user_id: UUID
    otp: str = Field(..., min_length=6, max_length=6)
    new_password: str = Field(..., min_length=6)


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class UserOut(CamelModel):
    id: UUID
    name: str
    email: str
    role: str
    status: str
    is_email_verified: bool


class SignupResponse(CamelModel):
    success: bool = True
    message: str
    user: UserOut
    is_first_user: bool


class TokenResponse(CamelModel):
    success: bool = True
    message: str = "Logged in successfully"
    access_token: str
    refresh_token: str
    user: UserOut


class OtpSentResponse(CamelModel):
    success: bool = True
    message: str
    user_id: UUID
