# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the connectors to every outside data source: plant photo ID, AI models, GBIF, image libraries, weather
# 🧪 Purpose (Technical Summary):
# Provider clients, one per upstream API, plus the registry that owns them
# 🔄 Connected Modules / Calls From:
# application plans and handlers, presentation dependencies, main lifespan

from .base import ProviderClient
from .gbif_client import GbifClient
from .gemini_client import GeminiClient
from .openweather_client import OpenWeatherClient
from .perplexity_client import PerplexityClient
from .plant_id_client import PlantIdClient
from .registry import ProviderRegistry
from .unsplash_client import UnsplashClient
from .wikimedia_client import WikimediaClient

__all__ = [
    "ProviderClient",
    "GbifClient",
    "GeminiClient",
    "OpenWeatherClient",
    "PerplexityClient",
    "PlantIdClient",
    "ProviderRegistry",
    "UnsplashClient",
    "WikimediaClient",
]
