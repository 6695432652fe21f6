from passlib.context import CryptContext
from fastapi import HTTPException, status
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4
import hashlib
import secrets
import jwt
from app.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a hashed password against a plain password."""
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)


def generate_otp() -> str:
    """Six digit one-time code."""
    return f"{secrets.randbelow(900000) + 100000}"


def hash_token(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token with an expiration time.
    If expires_delta is not provided, it defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_ACCESS_SECRET, algorithm=settings.ALGORITHM)


def create_refresh_token(user_id: str) -> tuple:
    """
    Create a JWT refresh token for long-term authentication.
    Returns the token and its expiry.
    """
    expire = datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode = {
        "sub": user_id,
        "type": "refresh",
        "jti": uuid4().hex,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.JWT_REFRESH_SECRET, algorithm=settings.ALGORITHM), expire


def verify_token(token: str, token_type: str = "access") -> dict:
    """
    Verify a JWT token and return the payload.
    """
    secret = settings.JWT_REFRESH_SECRET if token_type == "refresh" else settings.JWT_ACCESS_SECRET
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail={"error": "Token expired"})
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail={"error": "Invalid token"})

    if payload.get("type") != token_type or not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail={"error": "Invalid token"})
    return payload
