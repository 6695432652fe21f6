"""
Base service class for resource modules

Provides the session handle, lookup-or-404 and partial-update helpers shared
by customers, vehicles, jobs, invoices and the rest.
"""
from typing import Any, Dict, Iterable, Optional, Type
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.common.mixins import LifecycleState


def escape_like(term: str) -> str:
    """Escapa los comodines de LIKE para buscar el texto literal."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BaseService:
    """Base service class for all resource services"""

    model: Type = None
    label: str = "Record"

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        """Records that have not been soft-deleted"""
        return self.db.query(self.model).filter(self.model.lifecycle != LifecycleState.DELETED)

    def _active_query(self):
        return self.db.query(self.model).filter(self.model.is_active)

    def _get_or_404(self, record_id: UUID, model: Optional[Type] = None, label: Optional[str] = None):
        model = model or self.model
        record = self.db.query(model).filter(
            model.id == record_id,
            model.lifecycle != LifecycleState.DELETED,
        ).first()
        if not record:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label or self.label} not found"
            )
        return record

    @staticmethod
    def _search(query, term: Optional[str], columns: Iterable):
        """Case-insensitive substring match over any of the columns"""
        if term and term.strip():
            pattern = f"%{escape_like(term.strip())}%"
            query = query.filter(or_(*[column.ilike(pattern, escape="\\") for column in columns]))
        return query

    @staticmethod
    def _apply_changes(record: Any, changes: Dict[str, Any]) -> None:
        """Partial merge: only fields present in the request are written"""
        if "is_active" in changes:
            active = changes.pop("is_active")
            if active is not None:
                record.set_active(active)
        for field, value in changes.items():
            setattr(record, field, value)

    def _save(self, record):
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def _soft_delete(self, record) -> None:
        record.soft_delete()
        self.db.commit()
