"""
Router para las preferencias del usuario actual
"""
from fastapi import APIRouter, Depends

from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_current_user
from app.modules.auth.models import User
from app.modules.settings.schemas import EmailConnectRequest, PasswordUpdate, SettingsOut, SettingsUpdate
from app.modules.settings.service import SettingsService

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=ApiResponse[SettingsOut])
async def get_settings(db: db_dependency, current_user: User = Depends(get_current_user)):
    """Preferencias del usuario (se crean con valores por defecto si no existen)"""
    return ok(SettingsService(db).get_settings(current_user))


@router.put("", response_model=ApiResponse[SettingsOut])
async def update_settings(
    data: SettingsUpdate,
    db: db_dependency,
    current_user: User = Depends(get_current_user),
):
    """
    Actualizar preferencias por sección

    - Secciones: workshop, tax, notifications, email, security, advanced
    - Solo cambian los campos enviados de cada sección
    """
    settings = SettingsService(db).update_settings(current_user, data)
    return ok(settings, message="Settings updated successfully")


@router.put("/password", response_model=ApiResponse[None])
async def update_password(
    data: PasswordUpdate,
    db: db_dependency,
    current_user: User = Depends(get_current_user),
):
    SettingsService(db).update_password(current_user, data)
    return ok(message="Password updated successfully")


@router.post("/email/connect", response_model=ApiResponse[SettingsOut])
async def connect_email(
    data: EmailConnectRequest,
    db: db_dependency,
    current_user: User = Depends(get_current_user),
):
    """Conectar proveedor de correo: smtp | google | outlook"""
    settings = SettingsService(db).connect_email(current_user, data.provider)
    return ok(settings, message=f"{data.provider.upper()} email connected successfully")
