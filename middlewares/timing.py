import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

class TimingMiddleware(BaseHTTPMiddleware):
    """Adds X-Latency-Ms to every response and logs the request line."""

    def __init__(self, app, slow_ms: int = 1000):
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)

        line = f"{request.method} {request.url.path} -> {response.status_code} ({latency_ms} ms)"
        if latency_ms >= self.slow_ms:
            logger.warning(f"slow request: {line}")
        else:
            logger.debug(line)
        return response
