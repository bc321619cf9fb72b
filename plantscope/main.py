# 📄 File: plantscope/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts the PlantScope service, connects the data sources, and makes sure
# every error comes back to the app in the same readable format
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory with lifespan-managed provider registry (aiohttp sessions opened
# lazily, closed on shutdown), middleware setup, v1 router registration, exception handlers mapping
# the PlantScope error taxonomy to HTTP, and the uvicorn entry point
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - plantscope.shared.config.settings
# - plantscope.shared.utils.logging
# - plantscope.modules.plant_lookup.infrastructure.external.registry
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - `plantscope` console script
# - tests (create_application)

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plantscope.api.middleware import (
    create_error_response,
    get_request_id,
    handle_validation_error,
    setup_middleware,
)
from plantscope.api.v1 import API_PREFIX, api_v1_router
from plantscope.modules.plant_lookup.infrastructure.external.registry import ProviderRegistry
from plantscope.shared.config.settings import Settings, get_settings
from plantscope.shared.core.exceptions import PlantScopeException
from plantscope.shared.utils.logging import (
    SERVICE_NAME,
    get_logger,
    log_shutdown_event,
    log_startup_event,
    setup_logging,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Builds the provider registry once per process; every request shares
    its HTTP sessions. Sessions are closed on shutdown.
    """
    settings: Settings = app.state.settings
    setup_logging()
    log_startup_event(SERVICE_NAME, settings.APP_VERSION, extra={"environment": settings.ENVIRONMENT})

    registry = ProviderRegistry.from_settings(settings)
    app.state.providers = registry
    logger.info(
        "Provider registry initialized",
        extra={"providers": [client.name for client in registry.clients()]}
    )

    try:
        yield
    finally:
        await registry.close_all()
        log_shutdown_event(SERVICE_NAME)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(PlantScopeException)
    async def plantscope_exception_handler(request: Request, exc: PlantScopeException) -> JSONResponse:
        level = logger.warning if exc.status_code >= 500 else logger.info
        level(
            f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
            extra={"error_code": exc.error_code, "status_code": exc.status_code}
        )
        return create_error_response(
            exc.error_code,
            exc.message,
            exc.status_code,
            exc.details,
            get_request_id(request)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return handle_validation_error(exc, get_request_id(request))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return create_error_response(
                "NOT_FOUND",
                "The requested resource was not found",
                404,
                {"path": str(request.url.path)},
                get_request_id(request)
            )
        return create_error_response(
            f"HTTP_{exc.status_code}",
            str(exc.detail),
            exc.status_code,
            None,
            get_request_id(request)
        )


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=False,
    )
    app.state.settings = settings

    # =========================================================================
    # MIDDLEWARE, ROUTERS, EXCEPTION HANDLERS
    # =========================================================================

    setup_middleware(app, settings)
    app.include_router(api_v1_router, prefix=API_PREFIX)
    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": f"{API_PREFIX}/health",
            "api_base": API_PREFIX,
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """Run the development server (`plantscope` console script)."""
    settings = get_settings()
    uvicorn.run(
        "plantscope.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
