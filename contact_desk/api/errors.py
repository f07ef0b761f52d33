"""
Exception handlers that render every error as ``{"error": <message>}``.

Validation failures add ``"details"``: a list of ``{field, message}`` items.
Routes raise ``HTTPException`` with either a plain string detail or a dict
carrying ``message`` and ``details``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_body(detail: Any) -> dict[str, Any]:
    if isinstance(detail, dict):
        body: dict[str, Any] = {"error": str(detail.get("message", "Error"))}
        if detail.get("details"):
            body["details"] = detail["details"]
        return body
    return {"error": str(detail)}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP exceptions in the API's error format."""
    if exc.status_code >= 500:
        logger.error(
            "HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request payloads are reported as 400, like field validation errors."""
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", []) if part != "body"]
        details.append(
            {
                "field": ".".join(loc) or None,
                "message": error.get("msg", "Invalid value"),
            }
        )

    logger.warning("Request validation failed on %s: %d error(s)", request.url.path, len(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request payload", "details": details},
    )


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
