"""
Servicios de negocio para el módulo de Clientes

- CRUD con teléfono único
- Búsqueda por nombre o teléfono (sin distinguir mayúsculas)
- Borrado: Admin elimina definitivamente (con sus vehículos); el resto hace soft delete
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.common.permissions import Action, Actor, check
from app.common.service import BaseService
from app.modules.customers.models import Customer
from app.modules.customers.schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

DUPLICATE_PHONE = "Customer with this phone number already exists"


class CustomerService(BaseService):
    """Servicio principal para gestión de clientes"""

    model = Customer
    label = "Customer"

    def list_customers(self, search: Optional[str] = None) -> List[Customer]:
        query = self._search(self._active_query(), search, [Customer.name, Customer.phone])
        return query.order_by(Customer.created_at.desc()).all()

    def get_customer(self, customer_id: UUID) -> Customer:
        return self._get_or_404(customer_id)

    def _ensure_phone_free(self, phone: str, exclude_id: Optional[UUID] = None):
        query = self.db.query(Customer).filter(Customer.phone == phone)
        if exclude_id:
            query = query.filter(Customer.id != exclude_id)
        if query.first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_PHONE)

    def _commit_unique(self, customer: Customer) -> Customer:
        try:
            return self._save(customer)
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_PHONE)

    def create_customer(self, customer_data: CustomerCreate) -> Customer:
        """Crear un nuevo cliente"""
        self._ensure_phone_free(customer_data.phone)
        customer = Customer(**customer_data.model_dump())
        customer = self._commit_unique(customer)
        logger.info(f"Customer created: {customer.id}")
        return customer

    def update_customer(self, customer_id: UUID, customer_data: CustomerUpdate) -> Customer:
        """Actualizar solo los campos enviados"""
        customer = self.get_customer(customer_id)
        changes = customer_data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)
        if changes.get("phone") is None:
            changes.pop("phone", None)
        elif changes["phone"] != customer.phone:
            self._ensure_phone_free(changes["phone"], exclude_id=customer.id)

        self._apply_changes(customer, changes)
        return self._commit_unique(customer)

    def delete_customer(self, customer_id: UUID, actor: Actor) -> bool:
        """
        Eliminar cliente. Devuelve True si fue eliminado definitivamente.
        """
        customer = self.get_customer(customer_id)

        if check("customers", Action.HARD_DELETE, actor, customer).allowed:
            self.db.delete(customer)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Customer has jobs or invoices; deactivate it instead",
                )
            logger.info(f"Customer {customer_id} permanently deleted by {actor.user_id}")
            return True

        self._soft_delete(customer)
        return False
