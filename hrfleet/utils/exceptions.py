import logging
import uuid
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hrfleet.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppException):
    status_code = 400


class ConflictError(AppException):
    status_code = 400


class InvalidIdentifier(AppException):
    status_code = 400


class NotFound(AppException):
    status_code = 404


class ServerError(AppException):
    status_code = 500

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.error = error


@contextmanager
def store_errors(message: str):
    """Turn driver failures into ServerError; application errors pass through."""
    try:
        yield
    except AppException:
        raise
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise ServerError(message, error=str(exc)) from exc


def is_unique_violation(exc: IntegrityError, column: str) -> bool:
    """True when the driver reports a unique-key clash on ``column``.

    SQLite says "UNIQUE constraint failed: employees.staff_number"; PostgreSQL
    says "duplicate key value violates unique constraint \"employees_staff_number_key\"".
    """
    detail = str(exc.orig).lower()
    return ("unique" in detail or "duplicate key" in detail) and column in detail


def parse_identifier(value: str, message: str) -> str:
    """Return the canonical form of a record id, or raise InvalidIdentifier."""
    try:
        return str(uuid.UUID(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier(message) from None


def _format_validation_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        error = exc.error if isinstance(exc, ServerError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, error=error),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_response("Validation failed", errors=_format_validation_errors(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown path and known path with the wrong method are both "no such route"
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=error_response("Route not found"))
        return JSONResponse(status_code=exc.status_code, content=error_response(str(exc.detail)))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error", error=str(exc)),
        )
