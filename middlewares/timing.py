import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from config.settings import settings

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """응답 헤더 X-Latency-Ms 추가 + 요청 로그 (느린 요청은 WARNING)"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)

        line = f"{request.method} {request.url.path} → {response.status_code} ({latency_ms}ms)"
        if latency_ms >= settings.SLOW_REQUEST_MS:
            logger.warning(f"느린 요청: {line}")
        else:
            logger.debug(line)
        return response
