"""
Router para el módulo de Vehículos
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.vehicles.schemas import VehicleCreate, VehicleOut, VehicleUpdate
from app.modules.vehicles.service import VehicleService

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("", response_model=ApiResponse[List[VehicleOut]])
async def get_vehicles(
    db: db_dependency,
    search: Optional[str] = Query(None, description="Búsqueda por marca, modelo o placa"),
    customer: Optional[UUID] = Query(None, description="Filtrar por cliente"),
    actor: Actor = Depends(get_actor),
):
    """Listar vehículos activos"""
    return ok(VehicleService(db).list_vehicles(search, customer))


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleOut])
async def get_vehicle(vehicle_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(VehicleService(db).get_vehicle(vehicle_id))


@router.post("", response_model=ApiResponse[VehicleOut], status_code=status.HTTP_201_CREATED)
async def create_vehicle(vehicle_data: VehicleCreate, db: db_dependency, actor: Actor = Depends(get_actor)):
    """
    Registrar un vehículo

    - **customer**: ID del cliente (debe existir)
    - **make**, **model**, **year**, **plateNo**: requeridos
    """
    vehicle = VehicleService(db).create_vehicle(vehicle_data)
    return ok(vehicle, message="Vehicle created successfully")


@router.put("/{vehicle_id}", response_model=ApiResponse[VehicleOut])
async def update_vehicle(
    vehicle_id: UUID,
    vehicle_data: VehicleUpdate,
    db: db_dependency,
    actor: Actor = Depends(get_actor),
):
    vehicle = VehicleService(db).update_vehicle(vehicle_id, vehicle_data)
    return ok(vehicle, message="Vehicle updated successfully")


@router.delete("/{vehicle_id}", response_model=ApiResponse[None])
async def delete_vehicle(vehicle_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    VehicleService(db).delete_vehicle(vehicle_id)
    return ok(message="Vehicle deleted successfully")
