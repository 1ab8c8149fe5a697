"""Domain exceptions raised by the service layer.

Services raise these instead of ``HTTPException`` so that business rules
stay independent of FastAPI. ``register_exception_handlers`` maps them to
JSON responses:

    DomainError            400
    PermissionDenied       403
    NotFound               404
    Conflict               409
    FieldValidationError   422

The body is ``{"detail": message, "code": code}`` plus
``"errors": {field: [message]}`` when the error is scoped to a field.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base class for business-rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str = "A business rule was violated.",
        *,
        code: str | None = None,
        field: str | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.field = field
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body: dict = {"detail": self.message, "code": self.code}
        if self.field:
            body["errors"] = {self.field: [self.message]}
        return body


class FieldValidationError(DomainError):
    """Submitted value for a single field is rejected."""

    status_code = 422
    default_code = "INVALID"


class PermissionDenied(DomainError):
    """The acting user lacks the capability for this operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"

    def __init__(self, message: str = "You do not have permission to perform this action.", **kw):
        super().__init__(message, **kw)


class NotFound(DomainError):
    """The requested record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "The requested resource was not found.", **kw):
        super().__init__(message, **kw)


class Conflict(DomainError):
    """The operation conflicts with the current state of the record."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as JSON."""
    logger.warning(f"{type(exc).__name__} [{exc.code}] on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handler to an application."""
    app.add_exception_handler(DomainError, domain_error_handler)
