"""
Router para el módulo de Facturación

Cada alta, cambio o baja se difunde como `invoiceUpdated`.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.channels import realtime_dependency
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.invoices.models import InvoiceStatus
from app.modules.invoices.schemas import InvoiceCreate, InvoiceOut, InvoiceUpdate
from app.modules.invoices.service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _payload(invoice) -> dict:
    return InvoiceOut.model_validate(invoice).model_dump(by_alias=True, mode="json")


@router.get("", response_model=ApiResponse[List[InvoiceOut]])
async def get_invoices(
    db: db_dependency,
    search: Optional[str] = Query(None, description="Número de factura o placa"),
    status: Optional[InvoiceStatus] = Query(None),
    customer: Optional[UUID] = Query(None),
    actor: Actor = Depends(get_actor),
):
    """Listar facturas activas, más recientes primero"""
    invoices = InvoiceService(db).list_invoices(search, status.value if status else None, customer)
    return ok(invoices)


@router.get("/{invoice_id}", response_model=ApiResponse[InvoiceOut])
async def get_invoice(invoice_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(InvoiceService(db).get_invoice(invoice_id))


@router.post("", response_model=ApiResponse[InvoiceOut], status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    """
    Crear factura

    - **customer**: ID del cliente (requerido)
    - **items**: al menos un ítem {description, quantity, price}
    - **subtotal** / **amount**: se calculan si no se envían
    """
    invoice = InvoiceService(db).create_invoice(invoice_data)
    await realtime.broadcast("invoiceUpdated", {"type": "created", "invoice": _payload(invoice)})
    return ok(invoice, message="Invoice created successfully")


@router.put("/{invoice_id}", response_model=ApiResponse[InvoiceOut])
async def update_invoice(
    invoice_id: UUID,
    invoice_data: InvoiceUpdate,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    invoice = InvoiceService(db).update_invoice(invoice_id, invoice_data)
    await realtime.broadcast("invoiceUpdated", {"type": "updated", "invoice": _payload(invoice)})
    return ok(invoice, message="Invoice updated successfully")


@router.delete("/{invoice_id}", response_model=ApiResponse[None])
async def delete_invoice(
    invoice_id: UUID,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    InvoiceService(db).delete_invoice(invoice_id)
    await realtime.broadcast("invoiceUpdated", {"type": "deleted", "invoiceId": str(invoice_id)})
    return ok(message="Invoice deleted successfully")
