import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_tracker.domain.errors import (
    InvalidIdentifier,
    NotFound,
    SchemaViolation,
    StoreUnavailable,
    ValidationError,
)

logger = logging.getLogger("task_tracker.http")


def _fail(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


async def _schema_violation(request: Request, exc: SchemaViolation):
    return _fail(400, "Validation Error", details=exc.details)


async def _validation_error(request: Request, exc: ValidationError):
    # MissingField / InvalidEnum carry a ready-made message
    return _fail(400, str(exc))


async def _invalid_identifier(request: Request, exc: InvalidIdentifier):
    return _fail(400, "Invalid ID format")


async def _not_found(request: Request, exc: NotFound):
    return _fail(404, "Task not found")


async def _store_unavailable(request: Request, exc: StoreUnavailable):
    logger.error(
        "store.unavailable",
        extra={"category": "http", "event": "store.unavailable", "operation": exc.operation, "path": request.url.path},
    )
    return _fail(503, "Service Unavailable")


async def _bad_request(request: Request, exc: RequestValidationError):
    return _fail(400, "Invalid request", details=[str(e.get("msg", e)) for e in exc.errors()])


async def _http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _fail(404, "Route not found")
    return _fail(exc.status_code, str(exc.detail))


async def _unhandled(request: Request, exc: Exception):
    logger.exception(
        "request.unhandled",
        exc_info=exc,
        extra={"category": "http", "event": "request.unhandled", "path": request.url.path},
    )
    return _fail(500, "Internal Server Error")


def install_error_handlers(app: FastAPI) -> None:
    # Starlette picks the most specific class in the MRO, so the subclasses win over ValidationError.
    app.add_exception_handler(SchemaViolation, _schema_violation)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidIdentifier, _invalid_identifier)
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(StoreUnavailable, _store_unavailable)
    app.add_exception_handler(RequestValidationError, _bad_request)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled)
