"""
Celery configuration for background tasks
"""
from celery import Celery
from celery.schedules import crontab
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

celery_app = Celery(
    "momentum_pos",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "app.modules.notifications.tasks",
    ]
)

beat_schedule = {}
if settings.REMINDER_SWEEP_ENABLED:
    # 09:00 in the business timezone
    beat_schedule["daily-service-reminders"] = {
        "task": "app.modules.notifications.tasks.send_service_reminders_task",
        "schedule": crontab(hour=(9 - settings.BUSINESS_UTC_OFFSET_HOURS) % 24, minute=0),
    }

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=30 * 60,  # 30 minutes
    task_soft_time_limit=25 * 60,  # 25 minutes
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=1000,

    result_expires=3600,  # 1 hour

    task_routes={
        "app.modules.notifications.tasks.*": {"queue": "notifications"},
    },

    beat_schedule=beat_schedule,

    # Tests run tasks inline, without a broker
    task_always_eager=settings.ENVIRONMENT == "test",
)

if __name__ == "__main__":
    celery_app.start()
