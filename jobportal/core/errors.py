"""
Exception handlers that render every failure as the API response envelope:

    {"success": false, "message": "...", "error": "...", "errors": [...]}

Endpoints raise fastapi.HTTPException as usual. A store failure is re-raised as
a 500 HTTPException chained ("raise ... from e") to the original error; the
original error text is exposed in "error" outside production only.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal.core.config import settings

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"
MISSING_FIELDS = "Please provide all required fields"

# Starlette's default details when no route matches the path or the method
_ROUTING_DETAILS = {"Not Found", "Method Not Allowed"}


def error_body(message: str, error: Optional[BaseException] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error is not None and not settings.is_production:
        body["error"] = str(error)
    body.update(extra)
    return body


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        message = err.get("msg", "Invalid value")
        if err.get("type") == "value_error" and message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": ".".join(loc), "message": message, "type": err.get("type", "")})
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _field_errors(exc)

    if any(e["type"] == "missing" for e in errors):
        message = MISSING_FIELDS
    elif len(errors) == 1:
        message = errors[0]["message"]
    else:
        message = "Validation failed"

    for e in errors:
        e.pop("type")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, errors=errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    status_code = exc.status_code
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    if status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED) and message in _ROUTING_DETAILS:
        status_code = status.HTTP_404_NOT_FOUND
        message = ROUTE_NOT_FOUND

    return JSONResponse(
        status_code=status_code,
        content=error_body(message, exc.__cause__),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Something went wrong!", exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
