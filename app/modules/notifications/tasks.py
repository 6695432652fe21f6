"""
Tareas de Celery para el barrido diario de recordatorios de servicio.

Los fallos de entrega quedan registrados en cada Notification; la tarea no se
reintenta para no reenviar recordatorios ya entregados.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from celery.signals import worker_process_init, worker_process_shutdown
from sqlalchemy.orm import Session

from app.core.celery import celery_app
from app.core.config import Settings, settings
from app.database.database import Database
from app.modules.email.service import EmailService
from app.modules.notifications.schemas import BulkTarget
from app.modules.notifications.service import NotificationService
from app.modules.whatsapp.service import WhatsAppService

logger = logging.getLogger(__name__)


@dataclass
class WorkerHandles:
    database: Database
    email_service: EmailService
    whatsapp_service: WhatsAppService

    @classmethod
    def build(cls, config: Settings) -> "WorkerHandles":
        return cls(
            database=Database(config.database_url),
            email_service=EmailService(config),
            whatsapp_service=WhatsAppService(config),
        )


@worker_process_init.connect
def init_worker_handles(**kwargs):
    """Un juego de handles por proceso del worker, guardado en la app de Celery."""
    celery_app.worker_handles = WorkerHandles.build(settings)
    logger.info("Worker handles ready")


@worker_process_shutdown.connect
def close_worker_handles(**kwargs):
    handles = getattr(celery_app, "worker_handles", None)
    if handles is not None:
        handles.database.dispose()


def sweep_reminders(
    db: Session,
    email_service: EmailService,
    whatsapp_service: WhatsAppService,
    method: str,
) -> Dict[str, dict]:
    """
    Envía recordatorios a los vehículos vencidos y a los que vencen pronto.
    """
    service = NotificationService(db, email_service=email_service, whatsapp_service=whatsapp_service)
    return {
        target.value: service.send_bulk(target.value, method)
        for target in (BulkTarget.OVERDUE, BulkTarget.DUE_SOON)
    }


@celery_app.task(bind=True)
def send_service_reminders_task(self, method: Optional[str] = None):
    """
    Tarea periódica (beat) del barrido diario.
    """
    handles = getattr(self.app, "worker_handles", None)
    if handles is None:
        # Ejecución fuera de un worker (modo eager)
        handles = WorkerHandles.build(settings)

    db = handles.database.session()
    try:
        results = sweep_reminders(
            db, handles.email_service, handles.whatsapp_service, method or settings.REMINDER_SWEEP_METHOD
        )
        logger.info(f"Reminder sweep finished: {results}")
        return {"status": "success", "results": results}
    except Exception as exc:
        logger.error(f"Reminder sweep failed: {str(exc)}")
        return {"status": "failed", "error": str(exc)}
    finally:
        db.close()
