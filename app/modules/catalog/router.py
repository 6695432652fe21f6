"""
Router para el Catálogo de servicios y productos
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.catalog.schemas import CatalogItemCreate, CatalogItemOut, CatalogItemUpdate
from app.modules.catalog.service import CatalogService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("", response_model=ApiResponse[List[CatalogItemOut]])
async def get_catalog(db: db_dependency, actor: Actor = Depends(get_actor)):
    """Ítems default activos más los ítems locales del usuario, por nombre"""
    return ok(CatalogService(db).list_items(actor))


@router.get("/type/{item_type}", response_model=ApiResponse[List[CatalogItemOut]])
async def get_catalog_by_type(item_type: str, db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(CatalogService(db).list_by_type(actor, item_type))


@router.post("", response_model=ApiResponse[CatalogItemOut], status_code=status.HTTP_201_CREATED)
async def create_catalog_item(item_data: CatalogItemCreate, db: db_dependency, actor: Actor = Depends(get_actor)):
    """
    Crear ítem de catálogo

    - **name**, **type** y **cost** son requeridos
    - **visibility**: `default` solo para Admin; por defecto `local`
    """
    item = CatalogService(db).create_item(item_data, actor)
    return ok(item, message="Catalog item created successfully")


@router.put("/{item_id}", response_model=ApiResponse[CatalogItemOut])
async def update_catalog_item(
    item_id: UUID,
    item_data: CatalogItemUpdate,
    db: db_dependency,
    actor: Actor = Depends(get_actor),
):
    item = CatalogService(db).update_item(item_id, item_data, actor)
    return ok(item, message="Catalog item updated successfully")


@router.delete("/{item_id}", response_model=ApiResponse[None])
async def delete_catalog_item(item_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    message = CatalogService(db).delete_item(item_id, actor)
    return ok(message=message)
