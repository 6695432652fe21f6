"""
Exception handlers that render every error in the API envelope.
"""
import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.common.schemas import errors_from_validation

logger = logging.getLogger(__name__)


def _http_error_body(exc: StarletteHTTPException) -> dict:
    body = {"success": False}
    if isinstance(exc.detail, dict):
        body.update(exc.detail)
        body.setdefault("message", body.get("error", "Request failed"))
    else:
        body["message"] = str(exc.detail)
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        body.setdefault("error", body["message"])
    return body


def register_exception_handlers(app: FastAPI, show_details: bool = False):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={"success": False, "message": f"Route {request.url.path} not found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_http_error_body(exc),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = errors_from_validation(exc.errors())
        message = errors[0]["message"] if errors else "Validation failed"
        if errors and errors[0]["field"] != "request":
            message = f"{errors[0]['field']}: {message}"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": message, "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        body = {"success": False, "message": "Internal server error"}
        if show_details:
            body["error"] = str(exc)
            body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
