from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pydantic import field_validator


def _parse_bool(v):
    if isinstance(v, str):
        return v.lower().strip('"').strip("'") in ("true", "1", "yes", "on")
    return bool(v)


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = 'momentum_user'
    POSTGRES_PASSWORD: str = 'momentum_pass'
    POSTGRES_DB: str = 'momentum_db'
    POSTGRES_HOST: str = 'postgres'
    POSTGRES_PORT: int = 5432

    # Redis settings (Celery broker)
    REDIS_HOST: str = 'redis'
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None

    # JWT settings
    JWT_ACCESS_SECRET: str = 'change-me-access-secret-momentum-2024'
    JWT_REFRESH_SECRET: str = 'change-me-refresh-secret-momentum-2024'
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    OTP_EXPIRE_MINUTES: int = 10
    BCRYPT_ROUNDS: int = 12

    # Email settings
    EMAIL_SMTP_SERVER: str = 'smtp.gmail.com'
    EMAIL_SMTP_PORT: int = 587
    EMAIL_USE_TLS: bool = True
    EMAIL_USERNAME: str = ''
    EMAIL_PASSWORD: str = ''
    EMAIL_FROM: str = ''
    EMAIL_FROM_NAME: str = 'Momentum AutoWorks'
    FRONTEND_URL: str = 'http://localhost:5173'

    # WhatsApp (Twilio) settings
    TWILIO_ACCOUNT_SID: str = ''
    TWILIO_AUTH_TOKEN: str = ''
    TWILIO_WHATSAPP_FROM: str = ''
    DEFAULT_COUNTRY_CODE: str = '+92'

    # Business rules
    WORKSHOP_NAME: str = 'Momentum AutoWorks'
    BUSINESS_UTC_OFFSET_HOURS: int = 5
    REMINDER_DUE_SOON_DAYS: int = 7
    REMINDER_SWEEP_ENABLED: bool = False
    REMINDER_SWEEP_METHOD: str = 'both'

    # CORS
    ALLOWED_ORIGINS: str = 'http://localhost:5173,http://localhost:3000'

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def redis_url(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @property
    def allowed_origins(self) -> list:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def smtp_configured(self) -> bool:
        return bool(self.EMAIL_USERNAME and self.EMAIL_PASSWORD)

    @property
    def twilio_configured(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN and self.TWILIO_WHATSAPP_FROM)

    @property
    def show_error_details(self) -> bool:
        return self.DEBUG and self.ENVIRONMENT == "development"

    model_config = SettingsConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("DEBUG", "EMAIL_USE_TLS", "REMINDER_SWEEP_ENABLED", mode="before")
    @classmethod
    def parse_bool(cls, v):
        return _parse_bool(v)

    @field_validator("REMINDER_SWEEP_METHOD")
    @classmethod
    def validate_sweep_method(cls, v):
        if v not in ("email", "whatsapp", "both"):
            raise ValueError("REMINDER_SWEEP_METHOD must be email, whatsapp or both")
        return v


settings = Settings()
