# 📄 File: plantscope/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Helpers that wrap every request: one writes a diary entry for it, one turns crashes into tidy error replies
# 🧪 Purpose (Technical Summary):
# Middleware package: request logging with request-id context binding, global error handling,
# CORS registration and the ordered setup used by the application factory
# 🔗 Dependencies:
# FastAPI, starlette
# 🔄 Connected Modules / Calls From:
# plantscope.main

"""
Middleware Stack Order (outermost first):
    1. ErrorHandlingMiddleware (assigns the request id, catches anything unhandled)
    2. RequestLoggingMiddleware (binds log context, logs request/response timing)
    3. CORSMiddleware
    4. Application routes
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plantscope.shared.config.settings import Settings

from .error_handling import ErrorHandlingMiddleware, create_error_response, handle_validation_error
from .logging import RequestLoggingMiddleware, get_request_id, should_exclude_path


def setup_middleware(app: FastAPI, settings: Settings):
    """Register middleware; Starlette wraps in reverse order of registration."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)


__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "create_error_response",
    "get_request_id",
    "handle_validation_error",
    "setup_middleware",
    "should_exclude_path",
]
