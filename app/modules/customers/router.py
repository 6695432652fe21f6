"""
Router para el módulo de Clientes

Todos los endpoints requieren autenticación.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.customers.schemas import CustomerCreate, CustomerOut, CustomerUpdate
from app.modules.customers.service import CustomerService

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=ApiResponse[List[CustomerOut]])
async def get_customers(
    db: db_dependency,
    search: Optional[str] = Query(None, description="Búsqueda por nombre o teléfono"),
    actor: Actor = Depends(get_actor),
):
    """
    Listar clientes activos, más recientes primero.
    """
    return ok(CustomerService(db).list_customers(search))


@router.get("/{customer_id}", response_model=ApiResponse[CustomerOut])
async def get_customer(customer_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    """Obtener un cliente por ID"""
    return ok(CustomerService(db).get_customer(customer_id))


@router.post("", response_model=ApiResponse[CustomerOut], status_code=status.HTTP_201_CREATED)
async def create_customer(customer_data: CustomerCreate, db: db_dependency, actor: Actor = Depends(get_actor)):
    """
    Crear un nuevo cliente

    - **name**: Nombre (requerido)
    - **phone**: Teléfono (requerido, único)
    """
    customer = CustomerService(db).create_customer(customer_data)
    return ok(customer, message="Customer created successfully")


@router.put("/{customer_id}", response_model=ApiResponse[CustomerOut])
async def update_customer(
    customer_id: UUID,
    customer_data: CustomerUpdate,
    db: db_dependency,
    actor: Actor = Depends(get_actor),
):
    """Actualizar cliente (solo los campos enviados)"""
    customer = CustomerService(db).update_customer(customer_id, customer_data)
    return ok(customer, message="Customer updated successfully")


@router.delete("/{customer_id}", response_model=ApiResponse[None])
async def delete_customer(customer_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    """
    Eliminar cliente. Un Admin lo elimina definitivamente junto con sus vehículos;
    otros roles lo marcan como eliminado.
    """
    hard = CustomerService(db).delete_customer(customer_id, actor)
    message = "Customer and vehicles permanently deleted" if hard else "Customer deleted successfully"
    return ok(message=message)
