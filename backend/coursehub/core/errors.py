"""
Error types raised by the persistence layer and the top-level handlers that
turn every failure into the API's JSON error shape.

The store produces exactly three failure variants:
- ValidationFailure: one or more fields broke a constraint, nothing was written
- ConflictFailure: a uniqueness or foreign key constraint rejected the write
- UnexpectedFault: any other database error

Authentication and authorization denials never reach these handlers as
faults; the auth dependency and the services raise HTTPException for them.
"""

import logging
from dataclasses import dataclass
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route Not Found"
VALIDATION_FAILED_MESSAGE = "Validation failed"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class StoreError(Exception):
    """Base class for failures reported by the persistence layer"""


class ValidationFailure(StoreError):
    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))

    def to_dict(self) -> dict:
        return {
            "message": VALIDATION_FAILED_MESSAGE,
            "errors": [{"field": e.field, "message": e.message} for e in self.errors],
        }


class ConflictFailure(StoreError):
    """A write was rejected by a uniqueness or referential constraint"""


class UnexpectedFault(StoreError):
    """Any other database failure; carries no client-facing detail"""


def _field_name(loc) -> str:
    # loc looks like ("body", "title") or ("body",) for an unparseable body
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) if parts else "body"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    # The router raises a plain "Not Found" when no route matches the path
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = ROUTE_NOT_FOUND_MESSAGE
    # Structured details (validation errors) are already in response shape
    content = detail if isinstance(detail, dict) else {"message": detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed or wrongly typed request bodies as field errors (400)"""
    errors = [FieldError(_field_name(err.get("loc", ())), err.get("msg", "Invalid value")) for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationFailure(errors).to_dict(),
    )


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


async def conflict_failure_handler(request: Request, exc: ConflictFailure) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": str(exc)})


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler for anything the routes did not handle.

    The exception stops here instead of reaching the server, so this is the
    only place internal detail is written out, and only when
    ENABLE_GLOBAL_ERROR_LOGGING is set. The client always gets the same body.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            settings = request.app.state.context.settings
            if settings.ENABLE_GLOBAL_ERROR_LOGGING:
                logger.error(
                    f"Global error handler: {request.method} {request.url.path}",
                    exc_info=(type(exc), exc, exc.__traceback__),
                )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": INTERNAL_ERROR_MESSAGE, "error": {}},
            )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(ConflictFailure, conflict_failure_handler)
