# 📄 File: plantscope/modules/plant_lookup/presentation/api/schemas/lookup_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines the JSON the app receives: the plant or disease facts, the pictures, and a report of
# which data sources answered and which did not
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas with camelCase aliases for the lookup envelope
# {record, images, manifest, warnings}, identification, suggestion, distribution and weather responses
# 🔗 Dependencies:
# pydantic (alias generator), domain ImageCandidate and AggregationManifest
# 🔄 Connected Modules / Calls From:
# presentation.api.v1 (plants, diseases, weather)

"""
Lookup API Schemas

Response Schemas:
- LookupResponse: record + images + manifest + warnings
- IdentifyResponse: LookupResponse plus ranked identification suggestions
- PlantSuggestionResponse: one autocomplete entry
- DiseaseSuggestionResponse: one disease-name autocomplete entry
- DistributionPointResponse: one deduplicated occurrence point
- WeatherResponse: current conditions

The record is passed through as a dict with absent fields already
removed; everything else is a typed schema.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ....domain.models.images import ImageCandidate
from ....domain.models.plan import AggregationManifest


class CamelModel(BaseModel):
    """Base schema serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageResponse(CamelModel):
    id: str
    url: str
    thumbnail_url: Optional[str] = None
    caption: Optional[str] = None
    source_provider: str

    @classmethod
    def from_candidate(cls, candidate: ImageCandidate) -> "ImageResponse":
        return cls(
            id=candidate.id,
            url=candidate.url,
            thumbnail_url=candidate.thumbnail_url,
            caption=candidate.caption,
            source_provider=candidate.source_provider
        )


class AttemptResponse(CamelModel):
    group: str
    provider: str
    status: str = Field(..., description="success | insufficient | failed | skipped | reused")
    fields: List[str] = Field(default_factory=list)
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    duration_ms: float = 0.0


class ManifestResponse(CamelModel):
    attempts: List[AttemptResponse] = Field(default_factory=list)
    satisfied_groups: List[str] = Field(default_factory=list)
    missing_groups: List[str] = Field(default_factory=list)
    degraded_groups: List[str] = Field(default_factory=list)

    @classmethod
    def from_manifest(cls, manifest: AggregationManifest) -> "ManifestResponse":
        return cls(
            attempts=[
                AttemptResponse(
                    group=attempt.group,
                    provider=attempt.provider,
                    status=attempt.status.value,
                    fields=attempt.fields,
                    error_code=attempt.error_code,
                    error_message=attempt.error_message,
                    duration_ms=round(attempt.duration_ms, 2)
                )
                for attempt in manifest.attempts
            ],
            satisfied_groups=manifest.satisfied_groups,
            missing_groups=manifest.missing_groups,
            degraded_groups=manifest.degraded_groups
        )


class LookupResponse(CamelModel):
    """Canonical record envelope returned by every lookup endpoint."""

    record: Dict[str, Any] = Field(default_factory=dict, description="Canonical record; absent fields omitted")
    images: List[ImageResponse] = Field(default_factory=list)
    manifest: ManifestResponse = Field(default_factory=ManifestResponse)
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "LookupResponse":
        manifest: AggregationManifest = result["manifest"]
        return cls(
            record=result["record"],
            images=[ImageResponse.from_candidate(c) for c in result["images"]],
            manifest=ManifestResponse.from_manifest(manifest),
            warnings=manifest.warnings
        )


class IdentifySuggestionResponse(CamelModel):
    name: str
    probability: float
    common_names: List[str] = Field(default_factory=list)
    gbif_id: Optional[int] = None
    similar_images: List[str] = Field(default_factory=list)


class IdentifyResponse(LookupResponse):
    suggestions: List[IdentifySuggestionResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "IdentifyResponse":
        lookup = LookupResponse.from_result(result)
        return cls(
            **lookup.model_dump(),
            suggestions=[IdentifySuggestionResponse(**s) for s in result.get("suggestions", [])]
        )


class PlantSuggestionResponse(CamelModel):
    key: Optional[int] = None
    scientific_name: Optional[str] = None
    common_names: List[str] = Field(default_factory=list)
    family: Optional[str] = None
    genus: Optional[str] = None
    species: Optional[str] = None


class DiseaseSuggestionResponse(CamelModel):
    name: str
    type: str = "disease"


class DistributionPointResponse(CamelModel):
    location: str
    latitude: float
    longitude: float
    description: str


class WeatherResponse(CamelModel):
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    conditions: Optional[str] = None
    description: Optional[str] = None
    wind_speed: Optional[float] = None
    pressure: Optional[float] = None
    observed_at: Optional[int] = None
    location: Optional[str] = None
