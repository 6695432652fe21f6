"""
Servicio de preferencias por usuario

Las preferencias se crean con valores por defecto la primera vez que se leen.
"""
import logging
from typing import Any, Dict

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.common.schemas import errors_from_validation
from app.modules.auth.models import User
from app.modules.auth.service import AuthService
from app.modules.settings.models import UserSettings
from app.modules.settings.schemas import SECTIONS, PasswordUpdate, SettingsUpdate

logger = logging.getLogger(__name__)


def _section_defaults(name: str) -> Dict[str, Any]:
    return SECTIONS[name]().model_dump(by_alias=True)


class SettingsService:

    def __init__(self, db: Session):
        self.db = db

    def get_settings(self, user: User) -> UserSettings:
        settings = self.db.query(UserSettings).filter(UserSettings.user_id == user.id).first()
        if settings is None:
            settings = UserSettings(user_id=user.id, **{name: _section_defaults(name) for name in SECTIONS})
            self.db.add(settings)
            self.db.commit()
            self.db.refresh(settings)
        return settings

    def _merge_section(self, settings: UserSettings, name: str, patch: Dict[str, Any]) -> None:
        current = {**_section_defaults(name), **(getattr(settings, name) or {})}
        try:
            merged = SECTIONS[name].model_validate({**current, **patch})
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"message": f"Invalid {name} settings", "errors": errors_from_validation(e.errors())},
            )
        # Reasignar el dict para que SQLAlchemy detecte el cambio en la columna JSON
        setattr(settings, name, merged.model_dump(by_alias=True))

    def update_settings(self, user: User, data: SettingsUpdate) -> UserSettings:
        settings = self.get_settings(user)
        for name, patch in data.model_dump(exclude_none=True).items():
            self._merge_section(settings, name, patch)
        self.db.commit()
        self.db.refresh(settings)
        return settings

    def update_password(self, user: User, data: PasswordUpdate) -> None:
        AuthService(self.db).change_password(user, data.current_password, data.new_password)
        logger.info(f"Password updated for user {user.id}")

    def connect_email(self, user: User, provider: str) -> UserSettings:
        """
        Marca el proveedor de correo como configurado.
        Las credenciales no se guardan en las preferencias.
        """
        settings = self.get_settings(user)
        email = {**_section_defaults("email"), **(settings.email or {})}
        email[f"{provider}Configured"] = True
        settings.email = email
        self.db.commit()
        self.db.refresh(settings)
        return settings
