"""
Dependencias de autenticación para FastAPI.
"""
from typing import Optional
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database.database import get_db
from app.modules.auth.models import User
from app.modules.auth.utils import verify_token
from app.common.permissions import Actor

security = HTTPBearer(auto_error=False)


class AuthDependencies:
    """Dependencias de autenticación reutilizables."""

    @staticmethod
    def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: Session = Depends(get_db)
    ) -> User:
        """
        Obtener usuario actual desde el access token.
        """
        if credentials is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "Not authorized, no token"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        payload = verify_token(credentials.credentials, "access")
        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail={"error": "Invalid token"})

        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail={"error": "User not found"})
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail={"error": "Account is deactivated"})

        return user


get_current_user = AuthDependencies.get_current_user


def get_actor(user: User = Depends(get_current_user)) -> Actor:
    """Usuario autenticado como sujeto de las reglas de permisos."""
    return Actor(user_id=user.id, role=user.role, name=user.name)
