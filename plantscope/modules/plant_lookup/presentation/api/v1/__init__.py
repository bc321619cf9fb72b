# 📄 File: plantscope/modules/plant_lookup/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the plant, disease and weather endpoints
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router

from .diseases import router as diseases_router
from .plants import router as plants_router
from .weather import router as weather_router

__all__ = ["plants_router", "diseases_router", "weather_router"]
