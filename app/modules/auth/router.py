from fastapi import APIRouter, Depends, status

from app.dependencies.dbDependecies import db_dependency
from app.dependencies.channels import email_dependency
from app.modules.auth.service import AuthService
from app.modules.auth.dependencies import get_current_user
from app.modules.auth.models import User
from app.modules.auth.schemas import (
    UserCreate, UserLogin, UserOut, SignupResponse, TokenResponse, OtpSentResponse,
    EmailRequest, VerifyEmailRequest, ResetPasswordRequest, RefreshTokenRequest
)
from app.common.schemas import ApiResponse, ok

auth_router = APIRouter()


@auth_router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserCreate, db: db_dependency, email_service: email_dependency):
    """
    Registrar nuevo usuario y enviar OTP de verificación por email.
    El primer usuario registrado queda como Admin.
    """
    auth_service = AuthService(db, email_service)
    user, is_first_user = auth_service.create_user(user_data)
    message = (
        "Admin user created successfully. Please verify your email to complete setup."
        if is_first_user else "User created successfully. Please verify your email."
    )
    return SignupResponse(message=message, user=UserOut.model_validate(user), is_first_user=is_first_user)


@auth_router.post("/send-verification-otp", response_model=OtpSentResponse)
def send_verification_otp(request_data: EmailRequest, db: db_dependency, email_service: email_dependency):
    """
    Reenviar OTP de verificación.
    """
    user = AuthService(db, email_service).send_verification_otp(request_data.email)
    return OtpSentResponse(message="Verification OTP sent to email", user_id=user.id)


@auth_router.post("/verify-email", response_model=ApiResponse[UserOut])
async def verify_email(request_data: VerifyEmailRequest, db: db_dependency):
    """
    Verificar email con el OTP recibido.
    """
    user = AuthService(db).verify_email(request_data.user_id, request_data.otp)
    return ok(user, message="Email verified successfully")


@auth_router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db: db_dependency):
    """
    Login con email y contraseña. Devuelve access token y refresh token.
    """
    user, access_token, refresh_token = AuthService(db).login(credentials.email, credentials.password)
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=UserOut.model_validate(user),
    )


@auth_router.post("/refresh", response_model=TokenResponse)
async def refresh_token(request_data: RefreshTokenRequest, db: db_dependency):
    """
    Obtener un nuevo par de tokens a partir de un refresh token válido.
    """
    user, access_token, new_refresh_token = AuthService(db).refresh_access_token(request_data.refresh_token)
    return TokenResponse(
        message="Token refreshed",
        access_token=access_token,
        refresh_token=new_refresh_token,
        user=UserOut.model_validate(user),
    )


@auth_router.post("/forgot-password", response_model=OtpSentResponse)
def forgot_password(request_data: EmailRequest, db: db_dependency, email_service: email_dependency):
    """
    Enviar OTP para restablecer contraseña.
    """
    user = AuthService(db, email_service).request_password_reset(request_data.email)
    return OtpSentResponse(message="Password-reset OTP sent to email", user_id=user.id)


@auth_router.post("/reset-password", response_model=ApiResponse[UserOut])
async def reset_password(request_data: ResetPasswordRequest, db: db_dependency):
    """
    Restablecer contraseña con OTP. Invalida todos los refresh tokens.
    """
    user = AuthService(db).reset_password(request_data.user_id, request_data.otp, request_data.new_password)
    return ok(user, message="Password reset successfully")


@auth_router.get("/me", response_model=ApiResponse[UserOut])
async def get_me(current_user: User = Depends(get_current_user)):
    """
    Obtener información del usuario actual.
    """
    return ok(current_user)


@auth_router.delete("/delete-me", response_model=ApiResponse[None])
async def delete_me(db: db_dependency, current_user: User = Depends(get_current_user)):
    """
    Eliminar la cuenta del usuario actual.
    """
    AuthService(db).delete_user(current_user)
    return ok(message="Account deleted successfully")
