# 📄 File: plantscope/modules/plant_lookup/application/handlers/__init__.py
# 🧭 Purpose (Layman Explanation):
# The coordinators that answer each plant, disease and weather question
# 🔄 Connected Modules / Calls From:
# presentation.dependencies

from .query_handlers import (
    CurrentWeatherQueryHandler,
    IdentifyPlantQueryHandler,
    LookupDiseaseQueryHandler,
    LookupPlantQueryHandler,
    PlantDistributionQueryHandler,
    SubjectAggregator,
    SuggestDiseasesQueryHandler,
    SuggestPlantsQueryHandler,
    apply_derived_fields,
)

__all__ = [
    "SubjectAggregator",
    "LookupPlantQueryHandler",
    "IdentifyPlantQueryHandler",
    "SuggestPlantsQueryHandler",
    "PlantDistributionQueryHandler",
    "LookupDiseaseQueryHandler",
    "SuggestDiseasesQueryHandler",
    "CurrentWeatherQueryHandler",
    "apply_derived_fields",
]
