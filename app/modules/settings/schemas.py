from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field, model_validator

from app.common.schemas import CamelModel


class WorkshopSection(CamelModel):
    business_name: str = "Momentum AutoWorks"
    phone: str = "+92 300 1234567"
    email: str = "info@momentumauto.com"
    address: str = "Block 5, Clifton, Karachi, Sindh, Pakistan"
    tax_registration: str = ""
    currency: str = "PKR (Rs)"
    logo: Optional[str] = None
    theme_color: str = "#c53032"


class TaxSection(CamelModel):
    cash: float = Field(18, ge=0, le=100)
    card: float = Field(18, ge=0, le=100)
    online: float = Field(18, ge=0, le=100)


class NotificationSection(CamelModel):
    service_due_reminders: bool = True
    service_due_days: int = Field(7, ge=1)
    overdue_alerts: bool = True
    overdue_days: int = Field(7, ge=1)
    job_completion: bool = True
    whatsapp: bool = False


class EmailSection(CamelModel):
    from_email: str = "noreply@momentumauto.com"
    signature: str = "Best regards,\nMomentum AutoWorks Team"
    invoice_subject: str = "Your Invoice #{invoice_number}"
    invoice_template: str = (
        "Dear {customer_name},\n\nThank you for choosing Momentum AutoWorks. "
        "Please find your invoice attached."
    )
    smtp_configured: bool = False
    google_configured: bool = False
    outlook_configured: bool = False


class SecuritySection(CamelModel):
    two_factor_enabled: bool = False
    session_timeout: bool = True
    session_timeout_minutes: int = Field(30, ge=5)


class AdvancedSection(CamelModel):
    marketplace_mode: bool = False


SECTIONS = {
    "workshop": WorkshopSection,
    "tax": TaxSection,
    "notifications": NotificationSection,
    "email": EmailSection,
    "security": SecuritySection,
    "advanced": AdvancedSection,
}


class SettingsUpdate(CamelModel):
    """Cada sección enviada se mezcla con la guardada; las omitidas no cambian."""
    workshop: Optional[Dict[str, Any]] = None
    tax: Optional[Dict[str, Any]] = None
    notifications: Optional[Dict[str, Any]] = None
    email: Optional[Dict[str, Any]] = None
    security: Optional[Dict[str, Any]] = None
    advanced: Optional[Dict[str, Any]] = None


class SettingsOut(CamelModel):
    id: UUID
    user_id: UUID
    workshop: WorkshopSection
    tax: TaxSection
    notifications: NotificationSection
    email: EmailSection
    security: SecuritySection
    advanced: AdvancedSection
    created_at: datetime
    updated_at: datetime


class PasswordUpdate(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("New password and confirm password do not match")
        return self


class EmailProvider(str, Enum):
    SMTP = "smtp"
    GOOGLE = "google"
    OUTLOOK = "outlook"


class EmailConnectRequest(CamelModel):
    provider: EmailProvider
    credentials: Optional[Dict[str, Any]] = None
