from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import logging

from app.core.config import Settings, settings as default_settings
from app.database.database import Database
from app.common.errors import register_exception_handlers
from app.common.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

from app.modules.auth.router import auth_router
from app.modules.customers.router import router as customers_router
from app.modules.vehicles.router import router as vehicles_router
from app.modules.jobs.router import router as jobs_router
from app.modules.invoices.router import router as invoices_router
from app.modules.service_history.router import router as service_history_router
from app.modules.comments.router import router as comments_router
from app.modules.catalog.router import router as catalog_router
from app.modules.notifications.router import router as notifications_router
from app.modules.settings.router import router as settings_router
from app.modules.dashboard.router import router as dashboard_router
from app.modules.reports.routers import financial_router, performance_router
from app.modules.realtime.router import router as realtime_router
from app.modules.realtime.manager import ConnectionManager
from app.modules.email.service import EmailService
from app.modules.whatsapp.service import WhatsAppService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    email_service: Optional[EmailService] = None,
    whatsapp_service: Optional[WhatsAppService] = None,
) -> FastAPI:
    """
    Construye la aplicación con sus handles de proceso: base de datos, correo,
    WhatsApp y registro de sockets. Los tests inyectan los suyos.
    """
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title="Momentum POS API",
        description="Workshop point-of-sale API: customers, vehicles, jobs, invoices and service reminders",
        version="1.0.0",
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
    )

    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=False)
    app.state.email_service = email_service or EmailService(settings)
    app.state.whatsapp_service = whatsapp_service or WhatsAppService(settings)
    app.state.realtime = ConnectionManager()

    # Add middleware (order matters!)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, show_details=settings.show_error_details)

    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    for router in (
        customers_router,
        vehicles_router,
        jobs_router,
        invoices_router,
        service_history_router,
        comments_router,
        catalog_router,
        notifications_router,
        settings_router,
        dashboard_router,
        financial_router,
        performance_router,
    ):
        app.include_router(router, prefix="/api")
    app.include_router(realtime_router)

    # Create database tables (only for development/tests)
    if settings.ENVIRONMENT in ("development", "test"):
        app.state.database.create_all()

    @app.get("/")
    async def read_root():
        return {
            "message": "Momentum POS API is running",
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT
        }

    @app.get("/health")
    async def health_check(request: Request):
        database_ok = request.app.state.database.ping()
        body = {
            "status": "OK" if database_ok else "ERROR",
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected" if database_ok else "disconnected",
        }
        return JSONResponse(status_code=200 if database_ok else 503, content=body)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Momentum POS API starting up...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug mode: {settings.DEBUG}")
        if not app.state.email_service.configured:
            logger.warning("SMTP not configured: emails will only be logged")
        if not app.state.whatsapp_service.configured:
            logger.warning("Twilio not configured: WhatsApp messages will only be logged")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Momentum POS API shutting down...")
        app.state.database.dispose()

    return app


app = create_app()
