"""
Request/Response Logging Middleware
Logs API requests and responses, including how many cookies each response sets.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log incoming requests and outgoing responses.
    Includes timing, status code and the number of Set-Cookie headers.
    """

    async def dispatch(self, request: Request, call_next):
        if request.url.path in ["/api/health", "/health"]:
            return await call_next(request)

        start_time = time.time()
        logger.info(
            f"→ {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'} "
            f"({len(request.cookies)} cookie(s))"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"✗ {request.method} {request.url.path} "
                f"failed after {process_time:.3f}s: {type(e).__name__}"
            )
            raise

        process_time = time.time() - start_time
        set_cookies = len(response.headers.getlist("set-cookie"))
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] "
            f"in {process_time:.3f}s, {set_cookies} cookie(s) set"
        )

        response.headers["X-Process-Time"] = str(process_time)
        return response
