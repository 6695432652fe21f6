from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.service_history.schemas import ServiceHistoryCreate, ServiceHistoryOut, ServiceHistoryUpdate
from app.modules.service_history.service import ServiceHistoryService

router = APIRouter(prefix="/service-history", tags=["Service History"])


@router.get("", response_model=ApiResponse[List[ServiceHistoryOut]])
async def get_service_history(
    db: db_dependency,
    vehicle: Optional[UUID] = Query(None),
    customer: Optional[UUID] = Query(None),
    actor: Actor = Depends(get_actor),
):
    """Historial de servicios, el más reciente primero"""
    return ok(ServiceHistoryService(db).list_records(vehicle, customer))


@router.get("/{record_id}", response_model=ApiResponse[ServiceHistoryOut])
async def get_service_record(record_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(ServiceHistoryService(db).get_record(record_id))


@router.post("", response_model=ApiResponse[ServiceHistoryOut], status_code=status.HTTP_201_CREATED)
async def create_service_record(data: ServiceHistoryCreate, db: db_dependency, actor: Actor = Depends(get_actor)):
    record = ServiceHistoryService(db).create_record(data)
    return ok(record, message="Service history created successfully")


@router.put("/{record_id}", response_model=ApiResponse[ServiceHistoryOut])
async def update_service_record(
    record_id: UUID,
    data: ServiceHistoryUpdate,
    db: db_dependency,
    actor: Actor = Depends(get_actor),
):
    record = ServiceHistoryService(db).update_record(record_id, data)
    return ok(record, message="Service history updated successfully")


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_service_record(record_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    ServiceHistoryService(db).delete_record(record_id)
    return ok(message="Service history deleted successfully")
