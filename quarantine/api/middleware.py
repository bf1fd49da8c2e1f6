"""
Request timing and logging middleware
"""
import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log request timing for performance monitoring
    """
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"[TIMING] {request.method} {request.url.path} | duration={duration_ms:.2f}ms | status={response.status_code}")

        return response
