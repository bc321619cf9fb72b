# 📄 File: plantscope/modules/plant_lookup/presentation/api/v1/weather.py
# 🧭 Purpose (Layman Explanation):
# The web address the app calls for the current weather at a location
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router

from fastapi import APIRouter, Depends, Query

from ....application.handlers import CurrentWeatherQueryHandler
from ....application.queries import CurrentWeatherQuery
from ...dependencies import get_current_weather_handler
from ..schemas import WeatherResponse

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("", response_model=WeatherResponse, summary="Current weather at coordinates")
async def current_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    handler: CurrentWeatherQueryHandler = Depends(get_current_weather_handler),
) -> WeatherResponse:
    weather = await handler.handle(CurrentWeatherQuery(latitude=lat, longitude=lon))
    return WeatherResponse(**weather)
