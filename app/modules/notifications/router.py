"""
Router para Notificaciones y recordatorios de servicio

Los envíos responden 200 aunque la entrega falle: `success` indica el
resultado y `data` trae el registro actualizado.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, fail, ok
from app.dependencies.channels import email_dependency, whatsapp_dependency
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.notifications.schemas import (
    BulkResult, NotificationDetailOut, NotificationOut, NotificationStats, ReminderOut,
    SendBulkRequest, SendNotificationRequest, ServiceReminderOut
)
from app.modules.notifications.service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=ApiResponse[List[ReminderOut]])
async def get_notifications(db: db_dependency, actor: Actor = Depends(get_actor)):
    """Recordatorios derivados de la fecha de próximo servicio de cada vehículo"""
    return ok(NotificationService(db).list_notifications())


@router.get("/stats", response_model=ApiResponse[NotificationStats])
async def get_notification_stats(db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(NotificationService(db).get_stats())


@router.get("/service-reminders", response_model=ApiResponse[List[ServiceReminderOut]])
async def get_service_reminders(db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(NotificationService(db).service_reminders())


@router.get("/history", response_model=ApiResponse[List[NotificationDetailOut]])
async def get_notification_history(
    db: db_dependency,
    customer: Optional[UUID] = Query(None, description="Filtrar por cliente"),
    vehicle: Optional[UUID] = Query(None, description="Filtrar por vehículo"),
    limit: int = Query(50, ge=1, le=500),
    actor: Actor = Depends(get_actor),
):
    """Registros de envío, más recientes primero"""
    return ok(NotificationService(db).history(customer, vehicle, limit))


@router.post("/send-email", response_model=ApiResponse[NotificationOut])
def send_email_notification(
    request_data: SendNotificationRequest,
    db: db_dependency,
    email_service: email_dependency,
    actor: Actor = Depends(get_actor),
):
    """
    Enviar recordatorio por email

    - **customerId** y **vehicleId** requeridos
    """
    service = NotificationService(db, email_service=email_service)
    sent, record = service.send_email(request_data.customer_id, request_data.vehicle_id)
    if sent:
        return ok(record, message="Email sent successfully")
    return fail("Failed to send email", record)


@router.post("/send-whatsapp", response_model=ApiResponse[NotificationOut])
def send_whatsapp_notification(
    request_data: SendNotificationRequest,
    db: db_dependency,
    whatsapp_service: whatsapp_dependency,
    actor: Actor = Depends(get_actor),
):
    service = NotificationService(db, whatsapp_service=whatsapp_service)
    sent, record = service.send_whatsapp(request_data.customer_id, request_data.vehicle_id)
    if sent:
        return ok(record, message="WhatsApp message sent successfully")
    return fail("Failed to send WhatsApp message", record)


@router.post("/send-bulk", response_model=ApiResponse[BulkResult])
def send_bulk_notifications(
    request_data: SendBulkRequest,
    db: db_dependency,
    email_service: email_dependency,
    whatsapp_service: whatsapp_dependency,
    actor: Actor = Depends(get_actor),
):
    """
    Envío masivo

    - **type**: all | overdue | due_soon
    - **method**: email | whatsapp | both
    """
    service = NotificationService(db, email_service=email_service, whatsapp_service=whatsapp_service)
    results = service.send_bulk(request_data.type, request_data.method)
    message = (
        f"Bulk notifications sent. Email: {results['email_sent']}, "
        f"WhatsApp: {results['whatsapp_sent']}, Failed: {results['failed']}"
    )
    return ok(results, message=message)
