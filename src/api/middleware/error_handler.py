"""Global error handling for consistent error responses."""

import logging
import traceback
from typing import Any, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors.

    Raise subclasses of this to return a specific status code and message
    to the client.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "api_error",
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            error_type: Error category/type for client handling.
            headers: Extra response headers.
        """
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.headers = headers
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_type="not_found",
        )


class AuthenticationError(APIError):
    """Bearer token missing, malformed, expired or badly signed."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_type="authentication_error",
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(APIError):
    """Authorization failure error."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_type="authorization_error",
        )


class IntegrityError(APIError):
    """Stored data violates an invariant the service relies on."""

    def __init__(self, message: str = "Data integrity error") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type="integrity_error",
        )


class UpstreamError(APIError):
    """A backing service failed or could not be reached."""

    def __init__(self, message: str = "Upstream service unavailable") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_type="store_unavailable",
        )


def create_error_response(
    error_type: str,
    message: str,
    status_code: int,
    request_id: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized JSON error response.

    Args:
        error_type: Error category for client handling.
        message: Human-readable error description.
        status_code: HTTP status code.
        request_id: Optional request ID for tracing.
        headers: Optional extra response headers.

    Returns:
        JSONResponse: Formatted error response.
    """
    error_response = ErrorResponse(
        error=error_type,
        message=message,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) as ErrorResponse."""
    request_id = request.headers.get("X-Request-ID")
    logger.warning(
        "HTTP exception: %s - %s",
        exc.status_code,
        exc.detail,
        extra={"request_id": request_id},
    )
    return create_error_response(
        error_type="http_error",
        message=str(exc.detail),
        status_code=exc.status_code,
        request_id=request_id,
        headers=getattr(exc, "headers", None),
    )


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Middleware to catch and format all exceptions.

    Logs full stack traces for unexpected errors while returning safe
    messages to clients.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or formatted error response.
    """
    request_id = request.headers.get("X-Request-ID")

    try:
        return await call_next(request)

    except APIError as e:
        log = logger.error if e.status_code >= 500 else logger.warning
        log(
            "API error: %s - %s",
            e.error_type,
            e.message,
            extra={"request_id": request_id, "status_code": e.status_code},
        )
        return create_error_response(
            error_type=e.error_type,
            message=e.message,
            status_code=e.status_code,
            request_id=request_id,
            headers=e.headers,
        )

    except Exception as e:
        logger.error(
            "Unhandled exception: %s\n%s",
            str(e),
            traceback.format_exc(),
            extra={"request_id": request_id},
        )
        return create_error_response(
            error_type="internal_error",
            message="An unexpected error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id=request_id,
        )
