"""Application errors and the handlers that turn them into JSON responses.

Every error response has the same envelope::

    {"error": {"code": "...", "message": "...", "details": [...], "request_id": "..."}}
"""

from enum import StrEnum
from typing import Any, ClassVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from myflix.core.logging import get_logger

logger = get_logger("errors")


class ErrorCode(StrEnum):
    """Machine-readable error codes for API consumers."""

    # Lookups
    USER_NOT_FOUND = "USER_NOT_FOUND"
    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
    GENRE_NOT_FOUND = "GENRE_NOT_FOUND"
    DIRECTOR_NOT_FOUND = "DIRECTOR_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Input
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"

    # Credentials and tokens
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """One offending field."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of the error envelope."""

    code: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class ErrorWrapper(BaseModel):
    """The error envelope."""

    error: ErrorResponse


class AppException(Exception):
    """Base class for errors that map onto an HTTP response.

    Subclasses fix the status code and a default error code; callers may
    override the code to be more specific (e.g. ``MOVIE_NOT_FOUND``).
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    headers: ClassVar[dict[str, str] | None] = None

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        code: ErrorCode | None = None,
        details: list[dict[str, str]] | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)

    def to_response(self, request_id: str | None = None) -> dict[str, Any]:
        """Render the error envelope."""
        return ErrorWrapper(
            error=ErrorResponse(
                code=self.code,
                message=self.message,
                details=[ErrorDetail(**d) for d in self.details] if self.details else None,
                request_id=request_id,
            )
        ).model_dump()


class NotFoundError(AppException):
    """A user, movie, genre or director does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        code: ErrorCode | None = None,
    ) -> None:
        if resource_id is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} '{resource_id}' not found"
        super().__init__(message, code=code)


class ValidationError(AppException):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = ErrorCode.VALIDATION_ERROR


class ConflictError(AppException):
    """A unique value (such as a username) is already taken."""

    status_code = status.HTTP_409_CONFLICT
    code = ErrorCode.DUPLICATE_RESOURCE

    def __init__(
        self,
        resource: str = "Resource",
        field: str | None = None,
        value: Any = None,
    ) -> None:
        if field and value:
            super().__init__(f"{resource} with {field} '{value}' already exists")
        else:
            super().__init__(f"{resource} already exists")


class AuthenticationError(AppException):
    """Bad credentials, or a missing or rejected bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = ErrorCode.INVALID_CREDENTIALS
    headers = {"WWW-Authenticate": "Bearer"}


class AuthorizationError(AppException):
    """The caller is authenticated but may not act on this resource."""

    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCode.FORBIDDEN


def get_request_id(request: Request) -> str | None:
    """Request id assigned by the logging middleware, if any."""
    return getattr(request.state, "request_id", None)


def _error_response(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(get_request_id(request)),
        headers=exc.headers,
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("body", "username") -> "username"; a bare ("body",) stays as is
    if len(loc) > 1 and loc[0] in ("body", "path", "query", "header"):
        loc = loc[1:]
    return ".".join(str(part) for part in loc)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return _error_response(request, exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures field by field."""
    details = [
        {
            "field": _field_name(tuple(error.get("loc", ()))),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return _error_response(
        request,
        ValidationError("Request validation failed", details=details),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unexpected and answer with a bare 500."""
    logger.error(
        "Unhandled error while processing %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
        extra={"request_id": get_request_id(request)},
    )
    return _error_response(request, AppException())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
