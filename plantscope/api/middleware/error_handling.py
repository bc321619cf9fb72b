# 📄 File: plantscope/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches any problem that slips through and answers with the same tidy error message format every time
# 🧪 Purpose (Technical Summary):
# Outermost middleware assigning the correlation id and converting unhandled exceptions into the
# {"error": {code, message, details, timestamp, request_id}} body; helpers shared with the
# FastAPI exception handlers registered in plantscope.main
# 🔗 Dependencies:
# FastAPI, starlette, plantscope.shared.core.exceptions, logging
# 🔄 Connected Modules / Calls From:
# plantscope.main (middleware registration, exception handlers)

import time
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantscope.shared.config.settings import get_settings
from plantscope.shared.core.exceptions import PlantScopeException
from plantscope.shared.utils.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Typed PlantScope errors are normally answered by the FastAPI exception
    handlers; this layer is the net for whatever escapes them.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            response = self._handle_exception(request, exc, request_id)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{time.perf_counter() - start_time:.3f}s"
        return response

    def _handle_exception(self, request: Request, exc: Exception, request_id: str) -> JSONResponse:
        status_code, error_code, message, details = error_info(exc)

        log_context = {
            "request_id": request_id,
            "method": request.method,
            "path": str(request.url.path),
            "status_code": status_code,
            "exception_type": type(exc).__name__,
        }
        if status_code >= 500:
            logger.error(f"Server error in {request.method} {request.url.path}", extra=log_context, exc_info=True)
        else:
            logger.info(f"Client error in {request.method} {request.url.path}", extra=log_context)

        if self.settings.DEBUG and not self.settings.is_production:
            details = {
                **details,
                "debug": {
                    "exception_type": type(exc).__name__,
                    "traceback": traceback.format_exc().split("\n"),
                },
            }

        return create_error_response(error_code, message, status_code, details, request_id)


def error_info(exc: Exception):
    """(status_code, error_code, message, details) for any exception."""
    if isinstance(exc, PlantScopeException):
        return exc.status_code, exc.error_code, exc.message, exc.details or {}
    if isinstance(exc, HTTPException):
        return exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail), {}
    return 500, "INTERNAL_SERVER_ERROR", "An internal server error occurred", {}


def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 500,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None
) -> JSONResponse:
    """Standard error body shared by every non-2xx response."""
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": error_code,
                "message": message,
                "details": details or {},
                "timestamp": datetime.now().isoformat(),
                "request_id": request_id,
            }
        }
    )
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    response.headers["X-Error-Code"] = error_code
    return response


def handle_validation_error(exc, request_id: Optional[str] = None) -> JSONResponse:
    """422 body for FastAPI request validation failures."""
    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]
    return create_error_response(
        error_code="VALIDATION_ERROR",
        message="Request validation failed",
        status_code=422,
        details={"validation_errors": validation_errors},
        request_id=request_id
    )
