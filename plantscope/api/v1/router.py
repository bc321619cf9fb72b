# 📄 File: plantscope/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The switchboard that connects every v1 web address to the code that answers it
# 🧪 Purpose (Technical Summary):
# Aggregates the health router and the plant lookup module routers (plants, diseases, weather)
# into the single v1 router mounted by the application factory
# 🔗 Dependencies:
# FastAPI, plant lookup presentation routers
# 🔄 Connected Modules / Calls From:
# plantscope.main

from fastapi import APIRouter

from plantscope.modules.plant_lookup.presentation.api.v1 import (
    diseases_router,
    plants_router,
    weather_router,
)
from plantscope.shared.config.settings import get_settings

from .health import health_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router)
api_v1_router.include_router(plants_router)
api_v1_router.include_router(diseases_router)
api_v1_router.include_router(weather_router)


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info() -> dict:
    settings = get_settings()
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api_version": "v1",
        "endpoints": {
            "plant_lookup": "/plants/lookup",
            "plant_identify": "/plants/identify",
            "plant_suggest": "/plants/suggest",
            "plant_distribution": "/plants/{gbif_id}/distribution",
            "disease_lookup": "/diseases/lookup",
            "disease_suggest": "/diseases/suggest",
            "weather": "/weather",
            "health": "/health",
            "detailed_health": "/health/detailed",
        },
    }
