"""Translate errors into the JSON response envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from carebase.exceptions import CarebaseError, NotFoundError

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET    /",
    "GET    /api/health",
    "GET    /api/patients",
    "POST   /api/patients",
    "GET    /api/patients/:id",
    "PUT    /api/patients/:id",
    "DELETE /api/patients/:id",
    "GET    /api/appointments",
    "POST   /api/appointments",
    "GET    /api/appointments/:id",
    "PUT    /api/appointments/:id",
    "DELETE /api/appointments/:id",
    "GET    /api/medical",
    "POST   /api/seed",
    "GET    /api/seed",
]


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"] if p != "body")
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


async def carebase_error_handler(request: Request, exc: CarebaseError) -> JSONResponse:
    # Not-found responses carry a human message; everything else an error
    key = "message" if isinstance(exc, NotFoundError) else "error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, key: exc.message},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": _format_validation_errors(exc)},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths both fall through
    # to the endpoint listing
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Endpoint not found",
                "path": request.url.path,
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # The raw message is returned to the client unchanged
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "message": str(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CarebaseError, carebase_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
