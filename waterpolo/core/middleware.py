"""Middleware de tempo de resposta, rastreio e segurança"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from time import perf_counter
import logging
import uuid
from waterpolo.core.config import settings

logger = logging.getLogger(__name__)


class OptimizedMiddleware(BaseHTTPMiddleware):
    """Mede cada requisição e devolve um X-Request-ID para correlacionar os logs"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        start_time = perf_counter()

        response = await call_next(request)

        process_time = perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        response.headers["X-Request-ID"] = request_id

        # Headers de segurança
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        if process_time > settings.SLOW_REQUEST_SECONDS:
            logger.warning(
                f"[{request_id}] Requisição lenta: {request.method} {request.url.path} "
                f"levou {process_time:.4f}s"
            )
        elif response.status_code >= 500:
            logger.error(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")

        return response
