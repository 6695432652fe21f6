"""
Shared pydantic building blocks: camelCase models and the response envelope.
"""
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    count: Optional[int] = None


def ok(data: Any = None, message: Optional[str] = None, count: Optional[int] = None) -> dict:
    """Build a success envelope; list payloads get a count automatically."""
    if count is None and isinstance(data, list):
        count = len(data)
    return {"success": True, "message": message, "data": data, "count": count}


def fail(message: str, data: Any = None) -> dict:
    return {"success": False, "message": message, "data": data}


def errors_from_validation(errors: List[dict]) -> List[dict]:
    out = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        message = err.get("msg", "Invalid value").removeprefix("Value error, ")
        out.append({"field": ".".join(loc) or "request", "message": message})
    return out
