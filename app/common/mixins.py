"""
Common mixins for workshop models
"""
from datetime import datetime, timezone
from uuid import uuid4
import enum

from sqlalchemy import Column, DateTime, Enum, Uuid
from sqlalchemy.ext.hybrid import hybrid_property


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LifecycleState(str, enum.Enum):
    ACTIVE = "active"
    DEACTIVATED = "deactivated"
    DELETED = "deleted"


class IdMixin:
    """UUID primary key"""

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)


class TimestampMixin:
    """Mixin for models that need timestamp tracking"""

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class LifecycleMixin:
    """
    Explicit lifecycle tag instead of an is_active boolean.

    active -> deactivated -> deleted, with restore back to active.
    """

    lifecycle = Column(
        Enum(LifecycleState, name="lifecycle_state", values_callable=lambda e: [m.value for m in e]),
        default=LifecycleState.ACTIVE,
        nullable=False,
        index=True,
    )
    lifecycle_changed_at = Column(DateTime(timezone=True), nullable=True)

    @hybrid_property
    def is_active(self):
        # lifecycle is None until the insert default is applied
        return self.lifecycle in (None, LifecycleState.ACTIVE)

    @is_active.expression
    def is_active(cls):
        return cls.lifecycle == LifecycleState.ACTIVE

    @property
    def is_deleted(self):
        return self.lifecycle == LifecycleState.DELETED

    def _move_to(self, state: LifecycleState):
        self.lifecycle = state
        self.lifecycle_changed_at = utcnow()

    def deactivate(self):
        self._move_to(LifecycleState.DEACTIVATED)

    def soft_delete(self):
        self._move_to(LifecycleState.DELETED)

    def restore(self):
        self._move_to(LifecycleState.ACTIVE)

    def set_active(self, active: bool):
        """Map an isActive flag from the API onto the lifecycle tag."""
        if active and not self.is_active:
            self.restore()
        elif not active and self.is_active:
            self.deactivate()


class BaseMixin(IdMixin, TimestampMixin, LifecycleMixin):
    """Combines id, timestamps and lifecycle for most business models"""
