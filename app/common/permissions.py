"""
Declarative permission table.

Each (resource, action) pair maps to a rule that receives the acting user and
an optional target record and returns a Decision. Pairs without an entry are
open to every authenticated user.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status


class Role(str, Enum):
    ADMIN = "Admin"
    SUPERVISOR = "Supervisor"
    TECHNICIAN = "Technician"
    CASHIER = "Cashier"


class Action(str, Enum):
    LIST = "list"
    READ = "read"
    CREATE = "create"
    CREATE_DEFAULT = "create_default"
    UPDATE = "update"
    DELETE = "delete"
    HARD_DELETE = "hard_delete"


@dataclass(frozen=True)
class Actor:
    user_id: UUID
    role: str
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""


ALLOW = Decision(True)

Rule = Callable[[Actor, Any], Decision]


def admin_only(reason: str) -> Rule:
    def rule(actor: Actor, target: Any) -> Decision:
        return ALLOW if actor.is_admin else Decision(False, reason)
    return rule


def _owns_local(actor: Actor, item: Any) -> bool:
    return item.visibility == "local" and item.account == actor.user_id


def catalog_update(actor: Actor, item: Any) -> Decision:
    if actor.is_admin or _owns_local(actor, item):
        return ALLOW
    if item.visibility == "default":
        return Decision(False, "Only Admin can update default catalog items")
    return Decision(False, "You do not have permission to update this item")


def catalog_delete(actor: Actor, item: Any) -> Decision:
    if item.visibility == "default":
        if actor.is_admin:
            return ALLOW
        return Decision(False, "Only Admin can delete default catalog items")
    if actor.is_admin or _owns_local(actor, item):
        return ALLOW
    return Decision(False, "You do not have permission to delete this item")


RULES: Dict[Tuple[str, Action], Rule] = {
    ("catalog", Action.CREATE_DEFAULT): admin_only("Only Admin can publish default catalog items"),
    ("catalog", Action.UPDATE): catalog_update,
    ("catalog", Action.DELETE): catalog_delete,
    ("customers", Action.HARD_DELETE): admin_only("Only Admin can permanently delete customers"),
}


def check(resource: str, action: Action, actor: Actor, target: Optional[Any] = None) -> Decision:
    rule = RULES.get((resource, action))
    if rule is None:
        return ALLOW
    return rule(actor, target)


def ensure_allowed(resource: str, action: Action, actor: Actor, target: Optional[Any] = None) -> None:
    decision = check(resource, action, actor, target)
    if not decision.allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=decision.reason or "Forbidden")
