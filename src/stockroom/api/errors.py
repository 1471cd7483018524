"""Mapping of domain exceptions to JSON error responses.

Every error body has the shape ``{"error": "<message>"}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stockroom.exceptions import (
    InsufficientStock,
    NotFound,
    PersistenceError,
    StockroomError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES = (
    (NotFound, 404),
    (ValidationError, 400),
    (InsufficientStock, 400),
    (PersistenceError, 500),
)


def status_for(exc: StockroomError) -> int:
    for exc_class, status_code in _STATUS_CODES:
        if isinstance(exc, exc_class):
            return status_code
    return 500


def describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", str(err))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return " | ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StockroomError)
    async def stockroom_error_handler(request: Request, exc: StockroomError) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message, details=exc.details)
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": describe_validation_error(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
