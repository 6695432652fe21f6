"""
Servicios de negocio para el módulo de Vehículos
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func

from app.common.service import BaseService
from app.modules.customers.models import Customer
from app.modules.vehicles.models import Vehicle, VehicleStatus
from app.modules.vehicles.schemas import VehicleCreate, VehicleUpdate

logger = logging.getLogger(__name__)


class VehicleService(BaseService):
    """Servicio principal para gestión de vehículos"""

    model = Vehicle
    label = "Vehicle"

    def list_vehicles(self, search: Optional[str] = None, customer_id: Optional[UUID] = None) -> List[Vehicle]:
        query = self._active_query()
        if customer_id:
            query = query.filter(Vehicle.customer_id == customer_id)
        query = self._search(query, search, [Vehicle.make, Vehicle.model, Vehicle.plate_no])
        return query.order_by(Vehicle.created_at.desc()).all()

    def get_vehicle(self, vehicle_id: UUID) -> Vehicle:
        return self._get_or_404(vehicle_id)

    def _ensure_plate_free(self, plate_no: str, exclude_id: Optional[UUID] = None):
        """La placa es única entre los vehículos no eliminados"""
        query = self._base_query().filter(func.lower(Vehicle.plate_no) == plate_no.strip().lower())
        if exclude_id:
            query = query.filter(Vehicle.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Vehicle with this plate number already exists"
            )

    def create_vehicle(self, vehicle_data: VehicleCreate) -> Vehicle:
        """Crear vehículo; el cliente debe existir"""
        self._get_or_404(vehicle_data.customer, Customer, "Customer")
        self._ensure_plate_free(vehicle_data.plate_no)
        data = vehicle_data.model_dump(exclude={"customer"}, exclude_none=True)
        data.setdefault("status", VehicleStatus.ACTIVE.value)
        vehicle = Vehicle(customer_id=vehicle_data.customer, **data)
        vehicle = self._save(vehicle)
        logger.info(f"Vehicle created: {vehicle.id} for customer {vehicle.customer_id}")
        return vehicle

    def update_vehicle(self, vehicle_id: UUID, vehicle_data: VehicleUpdate) -> Vehicle:
        vehicle = self.get_vehicle(vehicle_id)
        changes = vehicle_data.model_dump(exclude_unset=True)
        customer_id = changes.pop("customer", None)
        if customer_id:
            self._get_or_404(customer_id, Customer, "Customer")
            vehicle.customer_id = customer_id
        for required in ("make", "model", "year", "plate_no", "mileage", "status"):
            if required in changes and changes[required] is None:
                changes.pop(required)
        if changes.get("plate_no") and changes["plate_no"] != vehicle.plate_no:
            self._ensure_plate_free(changes["plate_no"], exclude_id=vehicle.id)
        self._apply_changes(vehicle, changes)
        return self._save(vehicle)

    def delete_vehicle(self, vehicle_id: UUID) -> None:
        self._soft_delete(self.get_vehicle(vehicle_id))
