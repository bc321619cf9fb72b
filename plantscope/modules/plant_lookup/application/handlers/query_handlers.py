# 📄 File: plantscope/modules/plant_lookup/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "coordinators" that answer each question: they ask the data sources for facts, look for
# pictures and check the weather all at the same time, then put the answers together
# 🧪 Purpose (Technical Summary):
# Query handlers wiring Fallback Plans, the Fallback Chain Orchestrator, the Image Candidate
# Aggregator and the weather plan concurrently; derived-field enrichment; GBIF suggest and
# distribution reshaping; Plant.id identification with seeded plans
# 🔗 Dependencies:
# asyncio, provider registry, orchestrator, image aggregator, plan builder, field mappings
# 🔄 Connected Modules / Calls From:
# presentation.api.v1 (plants, diseases, weather routers) via presentation.dependencies

"""
Plant Lookup Query Handlers

- LookupPlantQueryHandler: plant record + images (+ weather with coordinates)
- IdentifyPlantQueryHandler: Plant.id suggestions, then a seeded plant lookup
- SuggestPlantsQueryHandler: GBIF autocomplete restricted to plants
- PlantDistributionQueryHandler: deduplicated occurrence points
- LookupDiseaseQueryHandler: disease record + images
- SuggestDiseasesQueryHandler: substring match over the configured common diseases
- CurrentWeatherQueryHandler: weather pass-through

Handlers return plain dicts; the presentation layer turns them into
response schemas.
"""

import asyncio
from typing import Any, Dict, List, Optional

from plantscope.shared.core.exceptions import InsufficientDataError
from plantscope.shared.utils.logging import get_logger

from ...domain.models.images import CandidateSet
from ...domain.models.plan import FallbackPlan
from ...domain.models.record import CanonicalRecord
from ...domain.models.subject import SubjectKind, SubjectQuery
from ...domain.services.fallback_orchestrator import FallbackOrchestrator
from ...domain.services.image_aggregator import ImageAggregator
from ...domain.services.record_normalizer import normalize
from ...infrastructure.external.registry import ProviderRegistry
from ..field_mappings import ADDITIONAL_INFO_CATEGORIES, OPENWEATHER_MAPPING, PLANT_ID_MAPPING, USE_CATEGORIES
from ..plans import PlanBuilder
from ..queries import (
    CurrentWeatherQuery,
    IdentifyPlantQuery,
    LookupDiseaseQuery,
    LookupPlantQuery,
    PlantDistributionQuery,
    SuggestDiseasesQuery,
    SuggestPlantsQuery,
)

logger = get_logger(__name__)


def apply_derived_fields(record: CanonicalRecord):
    """Bucket uses and additional notes by keyword; existing values are never overwritten."""
    uses = record.get("uses") or []
    buckets: Dict[str, List[str]] = {category: [] for category in USE_CATEGORIES}
    for use in uses:
        text = str(use).lower()
        for category, keywords in USE_CATEGORIES.items():
            if any(keyword in text for keyword in keywords):
                buckets[category].append(use)
    if any(buckets.values()):
        record.set_if_absent("usesByCategory", buckets)

    notes = record.get("additionalInformation") or []
    for field, keywords in ADDITIONAL_INFO_CATEGORIES.items():
        matching = [note for note in notes if any(k in str(note).lower() for k in keywords)]
        if matching:
            record.set_if_absent(field, matching)


class SubjectAggregator:
    """
    Runs one subject's record plans, image search and weather concurrently.

    The record and the images never depend on each other, so they are
    awaited together; weather is its own plan run merged afterwards.
    """

    def __init__(
        self,
        orchestrator: FallbackOrchestrator,
        image_aggregator: ImageAggregator,
        plans: PlanBuilder
    ):
        self.orchestrator = orchestrator
        self.image_aggregator = image_aggregator
        self.plans = plans

    async def aggregate(
        self,
        subject: SubjectQuery,
        record_plans: List[FallbackPlan],
        include_images: bool = True
    ) -> Dict[str, Any]:
        record_task = self.orchestrator.run(record_plans, subject)
        images_task = self._images(subject, include_images)
        weather_task = self._weather(subject)

        result, images, weather = await asyncio.gather(record_task, images_task, weather_task)

        manifest = result.manifest
        if weather is not None:
            result.record.merge(weather.record.to_dict())
            manifest.extend(weather.manifest)

        if subject.kind == SubjectKind.PLANT:
            apply_derived_fields(result.record)

        logger.info(
            f"Aggregated {subject.kind.value} '{subject.name}'",
            extra={
                "subject": subject.name,
                "satisfied_groups": manifest.satisfied_groups,
                "degraded_groups": manifest.degraded_groups,
                "missing_groups": manifest.missing_groups,
                "image_count": len(images),
            }
        )

        return {
            "record": result.record.to_dict(),
            "images": images.to_list(),
            "manifest": manifest,
        }

    async def _images(self, subject: SubjectQuery, include_images: bool) -> CandidateSet:
        if not include_images:
            return CandidateSet(cap=0)
        return await self.image_aggregator.aggregate(subject.name, subject.kind)

    async def _weather(self, subject: SubjectQuery):
        if not subject.has_coordinates:
            return None
        return await self.orchestrator.run(self.plans.weather_plans(), subject)


class LookupPlantQueryHandler:
    """Plant record by name."""

    def __init__(self, subjects: SubjectAggregator):
        self.subjects = subjects

    async def handle(self, query: LookupPlantQuery) -> Dict[str, Any]:
        subject = query.to_subject()
        logger.debug(f"Looking up plant: {subject.name}")
        return await self.subjects.aggregate(
            subject,
            self.subjects.plans.plant_plans(),
            include_images=query.include_images
        )


class IdentifyPlantQueryHandler:
    """
    Plant identification from an image.

    Plant.id is called outside of any fallback chain: when it fails the
    request fails. Its top suggestion is then replayed as the first
    descriptor of every plant group, and the identified name and GBIF key
    drive the remaining providers.
    """

    def __init__(self, providers: ProviderRegistry, subjects: SubjectAggregator):
        self.providers = providers
        self.subjects = subjects

    @staticmethod
    def rank_suggestions(suggestions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        usable = [s for s in suggestions if isinstance(s, dict) and s.get("plant_name")]
        return sorted(usable, key=lambda s: s.get("probability") or 0.0, reverse=True)

    @staticmethod
    def summarize(suggestion: Dict[str, Any], placeholders: List[str]) -> Dict[str, Any]:
        details = normalize(suggestion, PLANT_ID_MAPPING, placeholders)
        similar = suggestion.get("similar_images") or []
        return {
            "name": suggestion.get("plant_name"),
            "probability": round(float(suggestion.get("probability") or 0.0), 4),
            "commonNames": details.get("commonNames", []),
            "gbifId": details.get("gbifId"),
            "similarImages": [image["url"] for image in similar if isinstance(image, dict) and image.get("url")],
        }

    async def handle(self, query: IdentifyPlantQuery) -> Dict[str, Any]:
        subject = query.to_subject()

        # 1. Identify (hard failure on provider errors)
        response = await self.providers.plant_id.identify(
            subject.image,
            latitude=subject.latitude,
            longitude=subject.longitude
        )
        ranked = self.rank_suggestions(response.get("suggestions", []))
        if not ranked:
            raise InsufficientDataError(
                message="No plant could be identified in the image",
                subject="uploaded image",
                missing_groups=["identification"]
            )

        # 2. Bind the subject to the top suggestion
        placeholders = self.subjects.orchestrator.placeholders
        top = ranked[0]
        top_details = normalize(top, PLANT_ID_MAPPING, placeholders)
        gbif_id = _as_int(top_details.get("gbifId"))
        identified = subject.with_identity(top.get("plant_name"), gbif_id)

        logger.info(
            f"Identified image as {identified.name}",
            extra={"subject": identified.name, "probability": top.get("probability"), "gbif_id": gbif_id}
        )

        # 3. Seeded lookup for the top suggestion
        lookup = await self.subjects.aggregate(identified, self.subjects.plans.plant_plans(seed_suggestion=top))
        lookup["suggestions"] = [
            self.summarize(suggestion, placeholders)
            for suggestion in ranked[:query.max_suggestions]
        ]
        return lookup


class SuggestPlantsQueryHandler:
    def __init__(self, providers: ProviderRegistry):
        self.providers = providers

    @staticmethod
    def is_plant(entry: Dict[str, Any]) -> bool:
        return entry.get("kingdom") == "Plantae" or "plant" in str(entry.get("class") or "").lower()

    async def handle(self, query: SuggestPlantsQuery) -> List[Dict[str, Any]]:
        results = await self.providers.gbif.suggest(query.q, limit=query.limit)
        suggestions = []
        for entry in results:
            if not isinstance(entry, dict) or not self.is_plant(entry):
                continue
            suggestions.append({
                "key": entry.get("key"),
                "scientificName": entry.get("scientificName"),
                "commonNames": [
                    v.get("vernacularName") for v in entry.get("vernacularNames") or []
                    if isinstance(v, dict) and v.get("vernacularName")
                ],
                "family": entry.get("family"),
                "genus": entry.get("genus"),
                "species": entry.get("species"),
            })
        return suggestions


class PlantDistributionQueryHandler:
    def __init__(self, providers: ProviderRegistry):
        self.providers = providers

    async def handle(self, query: PlantDistributionQuery) -> List[Dict[str, Any]]:
        occurrences = await self.providers.gbif.occurrences(query.gbif_id, limit=query.limit)

        seen = set()
        points = []
        for occurrence in occurrences:
            latitude = occurrence.get("decimalLatitude")
            longitude = occurrence.get("decimalLongitude")
            if latitude is None or longitude is None:
                continue
            coordinate = f"{latitude},{longitude}"
            if coordinate in seen:
                continue
            seen.add(coordinate)

            location = occurrence.get("country") or "Unknown Location"
            locality = occurrence.get("locality")
            points.append({
                "location": location,
                "latitude": latitude,
                "longitude": longitude,
                "description": f"Found in {location}" + (f", {locality}" if locality else ""),
            })

        logger.debug(f"Distribution for {query.gbif_id}: {len(points)} of {len(occurrences)} points kept")
        return points


class LookupDiseaseQueryHandler:
    """Disease record by name."""

    def __init__(self, subjects: SubjectAggregator):
        self.subjects = subjects

    async def handle(self, query: LookupDiseaseQuery) -> Dict[str, Any]:
        subject = query.to_subject()
        return await self.subjects.aggregate(
            subject,
            self.subjects.plans.disease_plans(),
            include_images=query.include_images
        )


class SuggestDiseasesQueryHandler:
    def __init__(self, common_diseases: List[str]):
        self.common_diseases = common_diseases

    async def handle(self, query: SuggestDiseasesQuery) -> List[Dict[str, Any]]:
        term = query.q.strip().lower()
        if not term:
            return []
        matches = [name for name in self.common_diseases if term in name.lower()]
        return [{"name": name, "type": "disease"} for name in matches[:query.limit]]


class CurrentWeatherQueryHandler:
    """Weather pass-through; provider failures propagate to the caller."""

    def __init__(self, providers: ProviderRegistry, placeholders: Optional[List[str]] = None):
        self.providers = providers
        self.placeholders = placeholders or []

    async def handle(self, query: CurrentWeatherQuery) -> Dict[str, Any]:
        raw = await self.providers.openweather.current(query.latitude, query.longitude)
        return normalize(raw, OPENWEATHER_MAPPING, self.placeholders).get("weather", {})


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
