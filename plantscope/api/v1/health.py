# 📄 File: plantscope/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick "are you alive?" check, plus a detailed one listing which data sources are set up and
# how the machine is doing
# 🧪 Purpose (Technical Summary):
# Liveness and detailed health endpoints: provider configuration and call statistics from the
# provider registry, and system metrics via psutil
# 🔗 Dependencies:
# FastAPI, psutil, Settings, provider registry (app.state.providers)
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router, monitoring systems, load balancers

from datetime import datetime
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from plantscope.shared.config.settings import get_settings
from plantscope.shared.utils.logging import SERVICE_NAME, get_logger

logger = get_logger(__name__)

health_router = APIRouter()

# Application start time for uptime calculation
_app_start_time = datetime.now()


@health_router.get("/health", summary="Basic Health Check", tags=["Health Check"])
async def health_check() -> JSONResponse:
    """Basic liveness check for load balancers."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
        }
    )


@health_router.get("/health/detailed", summary="Detailed Health Check", tags=["Health Check"])
async def detailed_health_check(request: Request) -> JSONResponse:
    """
    Provider configuration/statistics and system resources.

    Unconfigured providers degrade the status but never fail it: every
    lookup still answers from whichever providers remain.
    """
    start_time = datetime.now()
    overall_status = "healthy"
    components: Dict[str, Any] = {}

    registry = getattr(request.app.state, "providers", None)
    if registry is None:
        components["providers"] = {"status": "unavailable"}
        overall_status = "degraded"
    else:
        providers = registry.status()
        unconfigured = [name for name, stats in providers.items() if not stats.get("configured")]
        components["providers"] = {
            "status": "degraded" if unconfigured else "healthy",
            "unconfigured": unconfigured,
            "details": providers,
        }
        if unconfigured:
            overall_status = "degraded"

    system_metrics = _get_system_metrics()
    components["system"] = system_metrics
    if system_metrics["status"] != "healthy":
        overall_status = "degraded"

    return JSONResponse(
        status_code=200,
        content={
            "status": overall_status,
            "timestamp": datetime.now().isoformat(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
            "uptime_seconds": (datetime.now() - _app_start_time).total_seconds(),
            "response_time_seconds": (datetime.now() - start_time).total_seconds(),
            "components": components,
        }
    )


def _get_system_metrics() -> Dict[str, Any]:
    try:
        memory = psutil.virtual_memory()
        disk = psutil.disk_usage("/")
        cpu_percent = psutil.cpu_percent(interval=None)
    except OSError as e:
        logger.warning(f"System metrics unavailable: {e}")
        return {"status": "error", "error": str(e)}

    disk_percent = (disk.used / disk.total) * 100
    status = "healthy"
    if cpu_percent > 90 or memory.percent > 90 or disk_percent > 95:
        status = "degraded"

    return {
        "status": status,
        "cpu_percent": cpu_percent,
        "memory_percent": memory.percent,
        "disk_percent": round(disk_percent, 2),
    }
