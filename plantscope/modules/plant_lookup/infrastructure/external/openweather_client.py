# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/openweather_client.py
# 🧭 Purpose (Layman Explanation):
# Gets the current weather at a location so plant results can show local growing conditions
# 🧪 Purpose (Technical Summary):
# OpenWeatherMap current-conditions client (metric units, appid query key); raw JSON is reshaped
# by the weather mapping table
# 🔗 Dependencies:
# APIClient
# 🔄 Connected Modules / Calls From:
# weather plan in query handlers, /weather route

from typing import Any, Dict

from plantscope.shared.infrastructure.external_apis import APIClient

from .base import ProviderClient


class OpenWeatherClient(ProviderClient):
    """Weather provider."""

    name = "openweather"

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "OpenWeatherClient":
        return cls(APIClient(
            base_url=config["api_url"],
            api_name=cls.name,
            api_key=config.get("api_key"),
            timeout=timeout,
            requires_key=True
        ))

    async def current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        response = await self.api_client.get(
            "weather",
            params={
                "lat": latitude,
                "lon": longitude,
                "units": "metric",
                "appid": self.api_client.api_key,
            }
        )
        return response if isinstance(response, dict) else {}
