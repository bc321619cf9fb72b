# 📄 File: plantscope/modules/plant_lookup/application/queries/__init__.py
# 🧭 Purpose (Layman Explanation):
# All the read-only questions the plant lookup module can answer
# 🔄 Connected Modules / Calls From:
# application.handlers, presentation.api.v1

from .disease_queries import LookupDiseaseQuery, SuggestDiseasesQuery
from .plant_queries import IdentifyPlantQuery, LookupPlantQuery, PlantDistributionQuery, SuggestPlantsQuery
from .weather_queries import CurrentWeatherQuery

__all__ = [
    "LookupPlantQuery",
    "IdentifyPlantQuery",
    "SuggestPlantsQuery",
    "PlantDistributionQuery",
    "LookupDiseaseQuery",
    "SuggestDiseasesQuery",
    "CurrentWeatherQuery",
]
