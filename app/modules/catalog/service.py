"""
Servicios de negocio para el Catálogo

Un usuario ve los ítems `default` activos más sus propios ítems `local` activos.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import and_, or_

from app.common.permissions import Action, Actor, check, ensure_allowed
from app.common.service import BaseService
from app.modules.catalog.models import CatalogItem, CatalogItemType, Visibility
from app.modules.catalog.schemas import CatalogItemCreate, CatalogItemUpdate

logger = logging.getLogger(__name__)

VALID_TYPES = {t.value for t in CatalogItemType}


class CatalogService(BaseService):
    model = CatalogItem
    label = "Catalog item"

    def _visible_query(self, actor: Actor):
        return self._active_query().filter(
            or_(
                CatalogItem.visibility == Visibility.DEFAULT.value,
                and_(
                    CatalogItem.visibility == Visibility.LOCAL.value,
                    CatalogItem.account == actor.user_id,
                ),
            )
        )

    def list_items(self, actor: Actor) -> List[CatalogItem]:
        return self._visible_query(actor).order_by(CatalogItem.name.asc()).all()

    def list_by_type(self, actor: Actor, item_type: str) -> List[CatalogItem]:
        if item_type not in VALID_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Invalid type. Must be "service" or "product"',
            )
        query = self._visible_query(actor).filter(CatalogItem.type == item_type)
        return query.order_by(CatalogItem.name.asc()).all()

    def get_item(self, item_id: UUID) -> CatalogItem:
        return self._get_or_404(item_id)

    def create_item(self, item_data: CatalogItemCreate, actor: Actor) -> CatalogItem:
        """
        Los ítems nuevos son locales de quien los crea, salvo que un Admin pida
        explícitamente visibilidad `default`. Para otros roles la petición de
        `default` se ignora y el ítem queda local.
        """
        data = item_data.model_dump(exclude_none=True)
        requested = data.pop("visibility", None)
        if requested == Visibility.DEFAULT.value and check("catalog", Action.CREATE_DEFAULT, actor).allowed:
            visibility, account = Visibility.DEFAULT.value, None
        else:
            visibility, account = Visibility.LOCAL.value, actor.user_id

        item = CatalogItem(**data, visibility=visibility, account=account)
        item = self._save(item)
        logger.info(f"Catalog item {item.id} ({visibility}) created by {actor.user_id}")
        return item

    def update_item(self, item_id: UUID, item_data: CatalogItemUpdate, actor: Actor) -> CatalogItem:
        item = self.get_item(item_id)
        ensure_allowed("catalog", Action.UPDATE, actor, item)

        changes = item_data.model_dump(exclude_unset=True)
        for required in ("name", "type", "cost"):
            if changes.get(required) is None:
                changes.pop(required, None)
        self._apply_changes(item, changes)
        return self._save(item)

    def delete_item(self, item_id: UUID, actor: Actor) -> str:
        """
        Ítems default y ajenos se desactivan; los locales propios se eliminan.
        Devuelve el mensaje a mostrar.
        """
        item = self.get_item(item_id)
        ensure_allowed("catalog", Action.DELETE, actor, item)

        if item.visibility == Visibility.DEFAULT.value:
            item.deactivate()
            self.db.commit()
            logger.info(f"Default catalog item {item.id} deactivated by {actor.user_id}")
            return "Default catalog item deactivated"

        if item.account == actor.user_id:
            self.db.delete(item)
            self.db.commit()
            return "Catalog item deleted successfully"

        item.deactivate()
        self.db.commit()
        return "Catalog item deactivated"
