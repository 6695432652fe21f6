"""
Fixtures compartidas para los tests de la API

La aplicación se construye con SQLite en memoria y con canales de correo y
WhatsApp que registran los envíos en lugar de salir a la red.
"""
import asyncio
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["EMAIL_USERNAME"] = ""
os.environ["EMAIL_PASSWORD"] = ""

from datetime import date, timedelta  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.common.dates import business_today  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.database.database import Database  # noqa: E402
from app.main import create_app  # noqa: E402
from app.modules.auth.models import User  # noqa: E402
from app.modules.auth.utils import create_access_token, hash_password  # noqa: E402
from app.modules.customers.models import Customer  # noqa: E402
from app.modules.email.service import EmailDeliveryError, EmailService  # noqa: E402
from app.modules.vehicles.models import Vehicle  # noqa: E402
from app.modules.whatsapp.service import WhatsAppService  # noqa: E402

TEST_PASSWORD = "secret123"


def _event_loop_running() -> bool:
    """True cuando el envío se ejecuta dentro del event loop del servidor."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class RecordingEmailService(EmailService):
    """Renderiza los templates reales pero guarda los correos en memoria."""

    def __init__(self):
        super().__init__(settings)
        self.configured = True
        self.sent: List[dict] = []
        self.fail = False
        self.attempts = 0

    def deliver(self, to_emails, subject, html_content=None, text_content=None):
        self.attempts += 1
        if self.fail:
            raise EmailDeliveryError("SMTP server unavailable")
        self.sent.append({
            "to": list(to_emails),
            "subject": subject,
            "html": html_content,
            "text": text_content,
            "in_event_loop": _event_loop_running(),
        })

    def last_otp(self) -> Optional[str]:
        for message in reversed(self.sent):
            text = message["text"] or ""
            if "OTP is " in text:
                return text.split("OTP is ")[1][:6]
        return None


class FakeTwilioMessages:
    def __init__(self):
        self.created: List[dict] = []
        self.fail = False

    def create(self, body, from_, to):
        if self.fail:
            raise RuntimeError("Twilio rejected the message")
        self.created.append({"body": body, "from_": from_, "to": to, "in_event_loop": _event_loop_running()})
        return SimpleNamespace(sid=f"SM{len(self.created):04d}")


class FakeTwilioClient:
    def __init__(self):
        self.messages = FakeTwilioMessages()


# ===== INFRAESTRUCTURA =====

@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def twilio_client():
    return FakeTwilioClient()


@pytest.fixture
def whatsapp_service(twilio_client):
    return WhatsAppService(settings, client=twilio_client)


@pytest.fixture
def app(database, email_service, whatsapp_service):
    return create_app(
        settings=settings,
        database=database,
        email_service=email_service,
        whatsapp_service=whatsapp_service,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


# ===== USUARIOS =====

@pytest.fixture
def make_user(db_session):
    def _make_user(email: str, role: str = "Technician", name: str = "Test User", verified: bool = True):
        user = User(
            name=name,
            email=email,
            password=hash_password(TEST_PASSWORD),
            role=role,
            is_email_verified=verified,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


def _auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return _auth_headers


@pytest.fixture
def user_password():
    return TEST_PASSWORD


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@momentumauto.com", role="Admin", name="Ali Raza")


@pytest.fixture
def technician_user(make_user):
    return make_user("tech@momentumauto.com", role="Technician", name="Bilal Hassan")


@pytest.fixture
def admin_headers(admin_user):
    return _auth_headers(admin_user)


@pytest.fixture
def technician_headers(technician_user):
    return _auth_headers(technician_user)


# ===== DATOS DEL TALLER =====

@pytest.fixture
def sample_customer(db_session):
    customer = Customer(
        name="Ahmed Khan",
        phone="03001234567",
        email="ahmed@example.com",
        address="Clifton, Karachi",
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def make_vehicle(db_session):
    def _make_vehicle(customer: Customer, plate_no: str = "ABC-123", next_service: Optional[date] = None, **kwargs):
        vehicle = Vehicle(
            customer_id=customer.id,
            make=kwargs.pop("make", "Toyota"),
            model=kwargs.pop("model", "Corolla"),
            year=kwargs.pop("year", 2019),
            plate_no=plate_no,
            next_service=next_service,
            **kwargs,
        )
        db_session.add(vehicle)
        db_session.commit()
        db_session.refresh(vehicle)
        return vehicle
    return _make_vehicle


@pytest.fixture
def sample_vehicle(make_vehicle, sample_customer):
    return make_vehicle(sample_customer, next_service=business_today() + timedelta(days=3))
