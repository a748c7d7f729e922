"""Custom middleware for request processing."""

import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from myflix.core.exceptions import generic_exception_handler
from myflix.core.logging import get_logger

logger = get_logger("access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and request ID injection.

    Adds a unique request ID to each request and logs request/response details.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        """Process the request and add logging."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            response = await generic_exception_handler(request, exc)
        process_time = (time.perf_counter() - start_time) * 1000  # ms

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time-Ms"] = f"{process_time:.2f}"

        logger.info(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time_ms": round(process_time, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )

        return response
