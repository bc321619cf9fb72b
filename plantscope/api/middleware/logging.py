# 📄 File: plantscope/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request: what was asked, how long it took, and how it ended
# 🧪 Purpose (Technical Summary):
# Request logging middleware binding the request id into the logging ContextVar for the duration of
# the request (so provider and orchestrator log lines carry it) and logging timing with status-based
# levels; sensitive query parameters are redacted
# 🔗 Dependencies:
# FastAPI, starlette, plantscope.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plantscope.api.middleware.setup_middleware

import time
import uuid
from typing import Dict, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantscope.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

SENSITIVE_PARAMS = {"key", "api_key", "token", "secret", "appid"}
SLOW_REQUEST_SECONDS = 5.0

# Paths that are not worth a log line per hit
EXCLUDED_LOG_PATHS: List[str] = ["/api/v1/health", "/health", "/favicon.ico"]


def should_exclude_path(path: str) -> bool:
    return any(path == excluded or path.startswith(excluded + "/") for excluded in EXCLUDED_LOG_PATHS)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request/response pair under a bound request id."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = get_request_id(request) or str(uuid.uuid4())
        request.state.request_id = request_id
        subject = request.query_params.get("name") or request.query_params.get("q")

        with log_context(request_id=request_id, subject=subject):
            if should_exclude_path(request.url.path):
                return await call_next(request)

            logger.info(
                f"HTTP Request: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query_params": self._filter_params(dict(request.query_params)),
                    "client_ip": self._client_ip(request),
                }
            )

            start_time = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"HTTP Error: {request.method} {request.url.path} -> {type(e).__name__}: {e}",
                    extra={"exception_type": type(e).__name__}
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.performance.log_request(
                request.method,
                request.url.path,
                response.status_code,
                round(duration_ms, 2),
                extra={"slow": duration_ms / 1000 > SLOW_REQUEST_SECONDS}
            )
            return response

    @staticmethod
    def _filter_params(params: Dict[str, str]) -> Dict[str, str]:
        return {k: ("[REDACTED]" if k.lower() in SENSITIVE_PARAMS else v) for k, v in params.items()}

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"


def get_request_id(request: Request) -> Optional[str]:
    """Request id assigned by the error-handling middleware, if any."""
    return getattr(request.state, "request_id", None)
