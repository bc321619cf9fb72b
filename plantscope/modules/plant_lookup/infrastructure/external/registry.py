# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/registry.py
# 🧭 Purpose (Layman Explanation):
# Keeps one connector per data source for the lifetime of the app and shuts them down cleanly at exit
# 🧪 Purpose (Technical Summary):
# ProviderRegistry built from settings at startup; owns every provider client's HTTP session and
# reports configuration status and call statistics for the detailed health check
# 🔗 Dependencies:
# dataclasses, asyncio, provider clients, Settings
# 🔄 Connected Modules / Calls From:
# plantscope.main lifespan, presentation dependencies, health endpoints

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List

from plantscope.shared.config.settings import Settings
from plantscope.shared.utils.logging import get_logger

from .base import ProviderClient
from .gbif_client import GbifClient
from .gemini_client import GeminiClient
from .openweather_client import OpenWeatherClient
from .perplexity_client import PerplexityClient
from .plant_id_client import PlantIdClient
from .unsplash_client import UnsplashClient
from .wikimedia_client import WikimediaClient

logger = get_logger(__name__)


@dataclass
class ProviderRegistry:
    """All provider clients used by the aggregation layer."""

    plant_id: PlantIdClient
    gemini: GeminiClient
    perplexity: PerplexityClient
    gbif: GbifClient
    wikimedia: WikimediaClient
    unsplash: UnsplashClient
    openweather: OpenWeatherClient

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        config = settings.get_provider_config()
        timeout = settings.PROVIDER_TIMEOUT_SECONDS
        registry = cls(
            plant_id=PlantIdClient.from_config(config["plant_id"], timeout),
            gemini=GeminiClient.from_config(config["gemini"], timeout),
            perplexity=PerplexityClient.from_config(config["perplexity"], timeout),
            gbif=GbifClient.from_config(config["gbif"], timeout),
            wikimedia=WikimediaClient.from_config(config["wikimedia"], timeout),
            unsplash=UnsplashClient.from_config(config["unsplash"], timeout),
            openweather=OpenWeatherClient.from_config(config["openweather"], timeout),
        )

        unconfigured = [client.name for client in registry.clients() if not client.is_configured]
        if unconfigured:
            logger.warning(
                f"Providers without credentials: {', '.join(unconfigured)}",
                extra={"unconfigured_providers": unconfigured}
            )
        return registry

    def clients(self) -> List[ProviderClient]:
        return [
            self.plant_id,
            self.gemini,
            self.perplexity,
            self.gbif,
            self.wikimedia,
            self.unsplash,
            self.openweather,
        ]

    def status(self) -> Dict[str, Dict[str, Any]]:
        return {client.name: client.get_stats() for client in self.clients()}

    async def close_all(self):
        results = await asyncio.gather(
            *(client.close() for client in self.clients()),
            return_exceptions=True
        )
        for client, result in zip(self.clients(), results):
            if isinstance(result, Exception):
                logger.error(f"Error closing {client.name} client: {result}")
