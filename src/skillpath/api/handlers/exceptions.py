"""
Exception Handlers for FastAPI Application.

Custom exception handlers that turn validation and wizard errors into
user-friendly JSON responses.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from skillpath.utils.exceptions import (
    AnswerRejected,
    ExternalServiceError,
    SessionNotFound,
)
from skillpath.utils.logger import get_logger

logger = get_logger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors and return detailed error messages.

    Args:
        request: FastAPI Request object.
        exc: RequestValidationError containing validation error details.

    Returns:
        JSONResponse with status 422 (Unprocessable Entity) containing:
            - detail: List of validation errors with field paths and messages
            - message: User-friendly error message
    """
    error_details = []
    for error in exc.errors():
        error_details.append(
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.error(
        "Validation error",
        extra={
            "extra_fields": {
                "validation_errors": error_details,
                "http_path": request.url.path if request else None,
            }
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": error_details,
            "message": "Validation error: Please check your input data",
        },
    )


async def answer_rejected_handler(request: Request, exc: AnswerRejected) -> JSONResponse:
    """Return 409 when an action does not fit the session's current state."""
    logger.info(
        "Action rejected",
        extra={"extra_fields": {"reason": str(exc), "http_path": request.url.path}},
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc)},
    )


async def session_not_found_handler(
    request: Request, exc: SessionNotFound
) -> JSONResponse:
    """Return 404 for an unknown wizard session."""
    logger.info(
        "Session not found",
        extra={"extra_fields": {"http_path": request.url.path}},
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Session not found"},
    )


async def external_service_handler(
    request: Request, exc: ExternalServiceError
) -> JSONResponse:
    """Return 502 when an external dependency without a fallback fails."""
    logger.error(
        "External service error",
        extra={"extra_fields": {"error": str(exc), "http_path": request.url.path}},
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )
