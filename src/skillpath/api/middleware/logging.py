"""
Request Logging Middleware.

Logs all incoming HTTP requests with structured context, tagged with the
request id and, for session routes, the wizard session id.
"""

import re
import time
from typing import Any

from fastapi import Request

from skillpath.utils.logger import clear_correlation_ids, get_logger, set_correlation_id

logger = get_logger(__name__)

_SESSION_PATH = re.compile(r"^/api/sessions/([^/]+)")


def get_client_ip(request: Request) -> str:
    """Return the client IP, preferring the proxy's X-Forwarded-For header."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def log_requests_middleware(request: Request, call_next: Any) -> Any:
    """Log every HTTP request and its response status.

    Args:
        request: FastAPI Request object containing request details.
        call_next: Callable that processes the request and returns the response.

    Returns:
        Response: The response from the next middleware/handler.
    """
    start_time = time.time()

    request_id = (
        request.headers.get("X-Request-ID")
        or request.headers.get("X-Amzn-Trace-Id", "").split("=")[-1]
        or None
    )
    match = _SESSION_PATH.match(request.url.path)
    set_correlation_id(
        request_id=request_id, session_id=match.group(1) if match else None
    )

    logger.info(
        "HTTP request",
        extra={
            "extra_fields": {
                "http_method": request.method,
                "http_path": request.url.path,
                "client_ip": get_client_ip(request),
                "user_agent": request.headers.get("User-Agent", ""),
            }
        },
    )

    try:
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "HTTP response",
            extra={
                "extra_fields": {
                    "http_method": request.method,
                    "http_path": request.url.path,
                    "http_status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            },
        )
        return response
    finally:
        clear_correlation_ids()
