# 📄 File: plantscope/modules/plant_lookup/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# The exact JSON shapes the plant lookup endpoints send back

from .lookup_schemas import (
    AttemptResponse,
    DiseaseSuggestionResponse,
    DistributionPointResponse,
    IdentifyResponse,
    IdentifySuggestionResponse,
    ImageResponse,
    LookupResponse,
    ManifestResponse,
    PlantSuggestionResponse,
    WeatherResponse,
)

__all__ = [
    "AttemptResponse",
    "DiseaseSuggestionResponse",
    "DistributionPointResponse",
    "IdentifyResponse",
    "IdentifySuggestionResponse",
    "ImageResponse",
    "LookupResponse",
    "ManifestResponse",
    "PlantSuggestionResponse",
    "WeatherResponse",
]
