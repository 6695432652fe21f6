"""
Servicios de negocio para Notificaciones y recordatorios de servicio

- Los recordatorios se derivan de `next_service` de cada vehículo activo
- "Hoy" se calcula en la zona horaria del negocio
- Cada envío actualiza el registro único (cliente, vehículo); los fallos de
  entrega se guardan en el registro y nunca se propagan como error HTTP
"""
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.common.dates import business_day_bounds, business_today
from app.common.mixins import LifecycleState, utcnow
from app.modules.customers.models import Customer
from app.modules.email.service import EmailDeliveryError, EmailService
from app.modules.notifications.models import (
    Notification, NotificationPriority, NotificationStatus, NotificationType
)
from app.modules.notifications.schemas import BulkTarget, DeliveryMethod
from app.modules.vehicles.models import Vehicle
from app.modules.whatsapp.service import WhatsAppDeliveryError, WhatsAppService

logger = logging.getLogger(__name__)

EMAIL = "email"
WHATSAPP = "whatsapp"
PRIORITY_ORDER = {"High": 3, "Medium": 2, "Low": 1}


def days_until(next_service: date, today: Optional[date] = None) -> int:
    return (next_service - (today or business_today())).days


def priority_for(days: int) -> str:
    if days <= 3:
        return NotificationPriority.HIGH.value
    if days <= 7:
        return NotificationPriority.MEDIUM.value
    return NotificationPriority.LOW.value


def reminder_status(days: int, delivered: bool) -> str:
    if days < 0:
        return "overdue"
    return "sent" if delivered else "pending"


def service_type_for(vehicle: Vehicle, today: date) -> Tuple[str, str]:
    """Tipo de servicio sugerido y su icono."""
    if vehicle.oil_type:
        return "Oil Change", "droplet"
    if vehicle.last_service and (today - vehicle.last_service).days > 90:
        return "Oil Change", "droplet"
    return "General Service", "wrench"


def _due_phrase(days: int) -> str:
    return f"overdue by {abs(days)} days" if days < 0 else f"due in {days} days"


def whatsapp_reminder_text(workshop_name: str, customer: Customer, vehicle: Vehicle, days: int) -> str:
    vehicle_text = f"*{vehicle.make} {vehicle.model} ({vehicle.plate_no})*"
    if days < 0:
        body = f"Your vehicle {vehicle_text} is overdue for service by *{abs(days)} days*."
    else:
        body = f"Your vehicle {vehicle_text} is due for service in *{days} days*."
    return (
        f"*{workshop_name} - Service Reminder*\n\n"
        f"Hello {customer.name},\n\n"
        f"{body}\n\n"
        f"*Service Due Date:* {vehicle.next_service.isoformat() if vehicle.next_service else '-'}\n\n"
        f"Please schedule an appointment with us.\n\n"
        f"Thank you,\n{workshop_name} Team"
    )


class NotificationService:
    """Derivación de recordatorios y envío por email / WhatsApp"""

    def __init__(
        self,
        db: Session,
        email_service: Optional[EmailService] = None,
        whatsapp_service: Optional[WhatsAppService] = None,
    ):
        self.db = db
        self.email_service = email_service
        self.whatsapp_service = whatsapp_service

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    def _reminder_vehicles(self, target: str = BulkTarget.ALL.value, today: Optional[date] = None) -> List[Vehicle]:
        """Vehículos activos con fecha de próximo servicio y cliente vigente."""
        today = today or business_today()
        query = (
            self.db.query(Vehicle)
            .join(Customer, Vehicle.customer_id == Customer.id)
            .options(joinedload(Vehicle.customer))
            .filter(
                Vehicle.is_active,
                Vehicle.next_service.isnot(None),
                Customer.lifecycle != LifecycleState.DELETED,
            )
        )
        if target == BulkTarget.OVERDUE.value:
            query = query.filter(Vehicle.next_service < today)
        elif target == BulkTarget.DUE_SOON.value:
            query = query.filter(
                Vehicle.next_service >= today,
                Vehicle.next_service <= today + timedelta(days=settings.REMINDER_DUE_SOON_DAYS),
            )
        return query.all()

    def _records_by_vehicle(self, vehicles: List[Vehicle]) -> Dict[Tuple[UUID, UUID], Notification]:
        if not vehicles:
            return {}
        records = self.db.query(Notification).filter(
            Notification.vehicle_id.in_([v.id for v in vehicles])
        ).all()
        return {(r.customer_id, r.vehicle_id): r for r in records}

    def list_notifications(self) -> List[dict]:
        """
        Un recordatorio por vehículo: vencidos primero, luego por cercanía.
        """
        today = business_today()
        vehicles = self._reminder_vehicles(today=today)
        records = self._records_by_vehicle(vehicles)

        reminders = []
        for vehicle in vehicles:
            customer = vehicle.customer
            days = days_until(vehicle.next_service, today)
            record = records.get((customer.id, vehicle.id))
            email_sent = bool(record and record.email_sent)
            whatsapp_sent = bool(record and record.whatsapp_sent)
            delivered = bool(record and record.delivered)
            service_type, _ = service_type_for(vehicle, today)

            reminders.append({
                "id": vehicle.id,
                "customer_id": customer.id,
                "vehicle_id": vehicle.id,
                "notification_id": record.id if record else None,
                "type": "service_overdue" if days < 0 else "service_due",
                "title": "Overdue Service Alert" if days < 0 else "Service Reminder",
                "message": (
                    f"{vehicle.make} {vehicle.model} ({vehicle.plate_no}) - "
                    f"{service_type} {_due_phrase(days)}"
                ),
                "customer": customer.name or "Unknown",
                "phone": customer.phone or "N/A",
                "email": customer.email or "N/A",
                "vehicle": vehicle,
                "due_date": vehicle.next_service,
                "priority": priority_for(days),
                "status": reminder_status(days, delivered),
                "sent": delivered,
                "email_sent": email_sent,
                "whatsapp_sent": whatsapp_sent,
                "days_until": days,
                "timestamp": vehicle.updated_at or vehicle.created_at,
            })

        reminders.sort(key=lambda r: (r["days_until"] >= 0, abs(r["days_until"])))
        return reminders

    def get_stats(self) -> dict:
        today = business_today()
        stats = {"pending_reminders": 0, "sent_today": 0, "overdue_alerts": 0, "scheduled": 0}

        for vehicle in self._reminder_vehicles(today=today):
            days = days_until(vehicle.next_service, today)
            if days < 0:
                stats["overdue_alerts"] += 1
                stats["pending_reminders"] += 1
            elif days <= settings.REMINDER_DUE_SOON_DAYS:
                stats["pending_reminders"] += 1
                stats["scheduled"] += 1
            else:
                stats["scheduled"] += 1

        start, end = business_day_bounds(today)
        stats["sent_today"] = self.db.query(Notification).filter(
            or_(
                Notification.email_sent_at.between(start, end),
                Notification.whatsapp_sent_at.between(start, end),
            )
        ).count()
        return stats

    def service_reminders(self) -> List[dict]:
        """
        Recordatorios detallados con tipo de servicio sugerido.
        Orden: vencidos, prioridad, cercanía.
        """
        today = business_today()
        reminders = []
        for vehicle in self._reminder_vehicles(today=today):
            customer = vehicle.customer
            days = days_until(vehicle.next_service, today)
            service_type, icon = service_type_for(vehicle, today)
            overdue = days < 0

            reminders.append({
                "id": vehicle.id,
                "customer_id": customer.id,
                "title": f"{service_type} {'Overdue' if overdue else 'Due'}",
                "message": f"{service_type} {_due_phrase(days)} based on service schedule",
                "customer": customer.name or "Unknown",
                "phone": customer.phone or "N/A",
                "vehicle": {
                    "make": vehicle.make,
                    "model": vehicle.model,
                    "plate": vehicle.plate_no,
                    "year": vehicle.year,
                },
                "service_type": service_type,
                "due_date": vehicle.next_service,
                "days_until": days,
                "priority": priority_for(days).capitalize(),
                "status": "Overdue" if overdue else "Pending",
                "icon": icon,
                "timestamp": vehicle.updated_at or vehicle.created_at,
            })

        reminders.sort(key=lambda r: (
            r["status"] != "Overdue",
            -PRIORITY_ORDER[r["priority"]],
            abs(r["days_until"]),
        ))
        return reminders

    def history(
        self,
        customer_id: Optional[UUID] = None,
        vehicle_id: Optional[UUID] = None,
        limit: int = 50,
    ) -> List[Notification]:
        query = self.db.query(Notification).options(
            joinedload(Notification.customer), joinedload(Notification.vehicle)
        )
        if customer_id:
            query = query.filter(Notification.customer_id == customer_id)
        if vehicle_id:
            query = query.filter(Notification.vehicle_id == vehicle_id)
        return query.order_by(Notification.created_at.desc()).limit(limit).all()

    # ------------------------------------------------------------------
    # Envío
    # ------------------------------------------------------------------

    def _load_pair(self, customer_id: UUID, vehicle_id: UUID) -> Tuple[Customer, Vehicle]:
        customer = self.db.query(Customer).filter(
            Customer.id == customer_id, Customer.lifecycle != LifecycleState.DELETED
        ).first()
        vehicle = self.db.query(Vehicle).filter(
            Vehicle.id == vehicle_id, Vehicle.lifecycle != LifecycleState.DELETED
        ).first()
        if not customer or not vehicle:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer or vehicle not found")
        if vehicle.customer_id != customer.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Vehicle does not belong to this customer",
            )
        return customer, vehicle

    def _find_record(self, customer_id: UUID, vehicle_id: UUID) -> Optional[Notification]:
        return self.db.query(Notification).filter(
            Notification.customer_id == customer_id,
            Notification.vehicle_id == vehicle_id,
        ).first()

    def _get_or_create_record(self, customer: Customer, vehicle: Vehicle, days: Optional[int]) -> Notification:
        """
        Registro único por (cliente, vehículo). Si otro proceso lo creó en
        paralelo, la restricción única falla y se vuelve a consultar.
        """
        record = self._find_record(customer.id, vehicle.id)
        if record:
            return record

        overdue = days is not None and days < 0
        record = Notification(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            type=(NotificationType.SERVICE_OVERDUE if overdue else NotificationType.SERVICE_REMINDER).value,
            title="Service Overdue Alert" if overdue else "Service Reminder",
            message=f"{vehicle.make} {vehicle.model} ({vehicle.plate_no}) - {_due_phrase(days or 0)}",
            due_date=vehicle.next_service,
            priority=priority_for(days or 0),
        )
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            record = self._find_record(customer.id, vehicle.id)
        return record

    def _deliver(self, channel: str, customer: Customer, vehicle: Vehicle, days: int) -> None:
        if channel == EMAIL:
            self.email_service.send_service_reminder_email(
                to_email=customer.email,
                customer_name=customer.name,
                vehicle_label=vehicle.label,
                plate_no=vehicle.plate_no,
                due_date=vehicle.next_service.isoformat() if vehicle.next_service else None,
                days_until=days,
            )
        else:
            self.whatsapp_service.send_message(
                customer.phone,
                whatsapp_reminder_text(self.whatsapp_service.workshop_name, customer, vehicle, days),
            )

    def _send_channel(self, channel: str, customer: Customer, vehicle: Vehicle) -> Tuple[Notification, Optional[str]]:
        """
        Entrega por un canal y deja constancia en el registro.
        Devuelve el registro y el error (None si se entregó).
        """
        days = days_until(vehicle.next_service) if vehicle.next_service else None
        record = self._get_or_create_record(customer, vehicle, days)

        error = None
        try:
            self._deliver(channel, customer, vehicle, days or 0)
        except (EmailDeliveryError, WhatsAppDeliveryError) as e:
            error = str(e)

        if error is None:
            setattr(record, f"{channel}_sent", True)
            setattr(record, f"{channel}_sent_at", utcnow())
            record.status = NotificationStatus.SENT.value
            record.error = None
        else:
            logger.warning(f"Reminder via {channel} failed for vehicle {vehicle.id}: {error}")
            record.status = NotificationStatus.FAILED.value
            record.error = error

        self.db.commit()
        self.db.refresh(record)
        return record, error

    def send_email(self, customer_id: UUID, vehicle_id: UUID) -> Tuple[bool, Notification]:
        customer, vehicle = self._load_pair(customer_id, vehicle_id)
        if not customer.email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Customer does not have an email address",
            )
        record, error = self._send_channel(EMAIL, customer, vehicle)
        return error is None, record

    def send_whatsapp(self, customer_id: UUID, vehicle_id: UUID) -> Tuple[bool, Notification]:
        customer, vehicle = self._load_pair(customer_id, vehicle_id)
        if not customer.phone:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Customer does not have a phone number",
            )
        record, error = self._send_channel(WHATSAPP, customer, vehicle)
        return error is None, record

    def send_bulk(self, target: str, method: str) -> dict:
        """
        Envío masivo sobre el conjunto filtrado de vehículos.
        Clientes sin email/teléfono para el canal se cuentan como omitidos.
        """
        if method == DeliveryMethod.BOTH.value:
            channels = [EMAIL, WHATSAPP]
        else:
            channels = [method]

        vehicles = self._reminder_vehicles(target)
        results = {
            "total": len(vehicles),
            "email_sent": 0,
            "whatsapp_sent": 0,
            "failed": 0,
            "skipped": 0,
            "errors": [],
        }

        for vehicle in vehicles:
            customer = vehicle.customer
            for channel in channels:
                contact = customer.email if channel == EMAIL else customer.phone
                if not contact:
                    results["skipped"] += 1
                    continue

                _, error = self._send_channel(channel, customer, vehicle)
                if error is None:
                    results[f"{channel}_sent"] += 1
                else:
                    results["failed"] += 1
                    results["errors"].append({
                        "customer": customer.name,
                        "vehicle": f"{vehicle.make} {vehicle.model}",
                        "channel": channel,
                        "error": error,
                    })

        logger.info(
            f"Bulk reminders ({target}/{method}): email={results['email_sent']} "
            f"whatsapp={results['whatsapp_sent']} failed={results['failed']} skipped={results['skipped']}"
        )
        return results
