"""
Servicios de negocio para el módulo de Facturación

Implementa:
- Numeración secuencial INV-000001 (reintenta si otro proceso tomó el número)
- subtotal = Σ precio × cantidad; total = subtotal + impuesto - descuento
- Recalculo de totales cuando cambian los ítems
- Soft delete
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.common.service import BaseService
from app.modules.customers.models import Customer
from app.modules.invoices.models import Invoice, InvoiceStatus
from app.modules.invoices.schemas import InvoiceCreate, InvoiceUpdate
from app.modules.jobs.models import Job

logger = logging.getLogger(__name__)

NUMBER_ATTEMPTS = 5


def calculate_subtotal(items: List[dict]) -> float:
    return round(sum(float(item["price"]) * int(item["quantity"]) for item in items), 2)


def calculate_amount(subtotal: float, tax: float, discount: float) -> float:
    return round(float(subtotal) + float(tax or 0) - float(discount or 0), 2)


class InvoiceService(BaseService):
    """Servicio principal para facturas"""

    model = Invoice
    label = "Invoice"

    def list_invoices(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        customer_id: Optional[UUID] = None,
    ) -> List[Invoice]:
        query = self._active_query()
        if status:
            query = query.filter(Invoice.status == status)
        if customer_id:
            query = query.filter(Invoice.customer_id == customer_id)
        query = self._search(query, search, [Invoice.invoice_number, Invoice.plate_no])
        return query.order_by(Invoice.date.desc()).all()

    def get_invoice(self, invoice_id: UUID) -> Invoice:
        return self._get_or_404(invoice_id)

    def next_invoice_number(self, offset: int = 0) -> str:
        count = self.db.query(Invoice).count()
        return f"INV-{count + 1 + offset:06d}"

    def create_invoice(self, invoice_data: InvoiceCreate) -> Invoice:
        """Crear factura; cliente (y trabajo, si se indica) deben existir"""
        self._get_or_404(invoice_data.customer, Customer, "Customer")
        if invoice_data.job:
            self._get_or_404(invoice_data.job, Job, "Job")

        items = [item.model_dump() for item in invoice_data.items]
        subtotal = invoice_data.subtotal if invoice_data.subtotal is not None else calculate_subtotal(items)
        tax = invoice_data.tax or 0
        discount = invoice_data.discount or 0
        amount = invoice_data.amount if invoice_data.amount is not None else calculate_amount(subtotal, tax, discount)
        vehicle = invoice_data.vehicle.model_dump() if invoice_data.vehicle else None

        values = dict(
            customer_id=invoice_data.customer,
            job_id=invoice_data.job,
            vehicle=vehicle,
            plate_no=(vehicle or {}).get("plate_no"),
            items=items,
            subtotal=subtotal,
            tax=tax,
            discount=discount,
            amount=amount,
            status=invoice_data.status or InvoiceStatus.PENDING.value,
            payment_method=invoice_data.payment_method,
            technician=invoice_data.technician,
            supervisor=invoice_data.supervisor,
            notes=invoice_data.notes,
        )
        if invoice_data.date:
            values["date"] = invoice_data.date

        for attempt in range(NUMBER_ATTEMPTS):
            invoice = Invoice(invoice_number=self.next_invoice_number(attempt), **values)
            try:
                invoice = self._save(invoice)
            except IntegrityError:
                self.db.rollback()
                logger.warning(f"Invoice number collision, retrying ({attempt + 1}/{NUMBER_ATTEMPTS})")
                continue
            logger.info(f"Invoice {invoice.invoice_number} created for customer {invoice.customer_id}")
            return invoice

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not allocate an invoice number"
        )

    def update_invoice(self, invoice_id: UUID, invoice_data: InvoiceUpdate) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        changes = invoice_data.model_dump(exclude_unset=True)

        if "job" in changes:
            job_id = changes.pop("job")
            if job_id:
                self._get_or_404(job_id, Job, "Job")
            invoice.job_id = job_id

        vehicle = changes.pop("vehicle", None)
        if vehicle:
            invoice.vehicle = vehicle
            invoice.plate_no = vehicle.get("plate_no")

        items = changes.pop("items", None)
        for field in ("tax", "discount"):
            if field in changes and changes[field] is None:
                changes[field] = 0
        for required in ("date", "status", "subtotal", "amount"):
            if required in changes and changes[required] is None:
                changes.pop(required)

        self._apply_changes(invoice, changes)

        if items:
            invoice.items = items
            invoice.subtotal = calculate_subtotal(items)
            invoice.amount = calculate_amount(invoice.subtotal, invoice.tax, invoice.discount)
        elif "tax" in changes or "discount" in changes:
            if "amount" not in changes:
                invoice.amount = calculate_amount(invoice.subtotal, invoice.tax, invoice.discount)

        return self._save(invoice)

    def delete_invoice(self, invoice_id: UUID) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        self._soft_delete(invoice)
        return invoice
