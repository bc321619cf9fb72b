# 📄 File: plantscope/modules/plant_lookup/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands every web endpoint the ready-made helpers it needs (data-source connectors, coordinators)
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers: provider registry from application state, orchestrator and image
# aggregator configured from Settings, and one provider function per query handler
# 🔗 Dependencies:
# FastAPI, Settings, provider registry, domain services, application handlers
# 🔄 Connected Modules / Calls From:
# presentation.api.v1 (plants, diseases, weather), tests (dependency_overrides)

from fastapi import Depends, Request

from plantscope.shared.config.settings import Settings, get_settings
from plantscope.shared.core.exceptions import PlantScopeException

from ..application.handlers import (
    CurrentWeatherQueryHandler,
    IdentifyPlantQueryHandler,
    LookupDiseaseQueryHandler,
    LookupPlantQueryHandler,
    PlantDistributionQueryHandler,
    SubjectAggregator,
    SuggestDiseasesQueryHandler,
    SuggestPlantsQueryHandler,
)
from ..application.plans import PlanBuilder
from ..domain.models.subject import SubjectKind
from ..domain.services.fallback_orchestrator import FallbackOrchestrator
from ..domain.services.image_aggregator import ImageAggregator
from ..infrastructure.external.registry import ProviderRegistry


# =========================================================================
# CORE COMPONENTS
# =========================================================================

def get_provider_registry(request: Request) -> ProviderRegistry:
    """Registry opened by the application lifespan."""
    registry = getattr(request.app.state, "providers", None)
    if registry is None:
        raise PlantScopeException(
            message="Provider registry is not initialized",
            status_code=503,
            error_code="SERVICE_NOT_READY"
        )
    return registry


def get_orchestrator(settings: Settings = Depends(get_settings)) -> FallbackOrchestrator:
    return FallbackOrchestrator(
        default_timeout=settings.PROVIDER_TIMEOUT_SECONDS,
        placeholders=settings.PLACEHOLDER_VALUES
    )


def get_image_aggregator(
    providers: ProviderRegistry = Depends(get_provider_registry),
    settings: Settings = Depends(get_settings)
) -> ImageAggregator:
    return ImageAggregator(
        primary=providers.wikimedia,
        secondary=providers.unsplash,
        relevance_terms={kind: settings.get_image_relevance_terms(kind.value) for kind in SubjectKind},
        target_count=settings.IMAGE_TARGET_COUNT,
        primary_cap=settings.IMAGE_PRIMARY_CAP,
        sufficient_count=settings.IMAGE_SUFFICIENT_COUNT,
        secondary_cap=settings.IMAGE_SECONDARY_CAP
    )


def get_subject_aggregator(
    providers: ProviderRegistry = Depends(get_provider_registry),
    orchestrator: FallbackOrchestrator = Depends(get_orchestrator),
    image_aggregator: ImageAggregator = Depends(get_image_aggregator)
) -> SubjectAggregator:
    return SubjectAggregator(orchestrator, image_aggregator, PlanBuilder(providers))


# =========================================================================
# QUERY HANDLERS
# =========================================================================

def get_lookup_plant_handler(
    subjects: SubjectAggregator = Depends(get_subject_aggregator)
) -> LookupPlantQueryHandler:
    return LookupPlantQueryHandler(subjects)


def get_identify_plant_handler(
    providers: ProviderRegistry = Depends(get_provider_registry),
    subjects: SubjectAggregator = Depends(get_subject_aggregator)
) -> IdentifyPlantQueryHandler:
    return IdentifyPlantQueryHandler(providers, subjects)


def get_suggest_plants_handler(
    providers: ProviderRegistry = Depends(get_provider_registry)
) -> SuggestPlantsQueryHandler:
    return SuggestPlantsQueryHandler(providers)


def get_plant_distribution_handler(
    providers: ProviderRegistry = Depends(get_provider_registry)
) -> PlantDistributionQueryHandler:
    return PlantDistributionQueryHandler(providers)


def get_lookup_disease_handler(
    subjects: SubjectAggregator = Depends(get_subject_aggregator)
) -> LookupDiseaseQueryHandler:
    return LookupDiseaseQueryHandler(subjects)


def get_current_weather_handler(
    providers: ProviderRegistry = Depends(get_provider_registry),
    settings: Settings = Depends(get_settings)
) -> CurrentWeatherQueryHandler:
    return CurrentWeatherQueryHandler(providers, placeholders=settings.PLACEHOLDER_VALUES)


def get_suggest_diseases_handler(
    settings: Settings = Depends(get_settings)
) -> SuggestDiseasesQueryHandler:
    return SuggestDiseasesQueryHandler(settings.COMMON_DISEASES)
