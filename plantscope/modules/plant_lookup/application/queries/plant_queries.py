# 📄 File: plantscope/modules/plant_lookup/application/queries/plant_queries.py
# 🧭 Purpose (Layman Explanation):
# Describes the questions the app can ask about plants: look one up by name, identify one from a
# photo, suggest names while typing, and show where a plant has been observed
# 🧪 Purpose (Technical Summary):
# Read-side query objects for the plant lookup module; each converts itself into the domain
# SubjectQuery consumed by the orchestrator and the image aggregator
# 🔗 Dependencies:
# pydantic, domain SubjectQuery
# 🔄 Connected Modules / Calls From:
# application.handlers.query_handlers, presentation.api.v1.plants

"""
Plant Queries

- LookupPlantQuery: full plant record by scientific or common name
- IdentifyPlantQuery: plant identification from an uploaded photo
- SuggestPlantsQuery: autocomplete over accepted species names
- PlantDistributionQuery: observation points for a GBIF taxon
"""

from typing import Optional

from pydantic import BaseModel, Field

from ...domain.models.subject import SubjectKind, SubjectQuery


class LookupPlantQuery(BaseModel):
    """Query for a plant record looked up by name."""

    name: str = Field(..., max_length=200, description="Scientific or common plant name",
                      examples=["Quercus alba"])
    latitude: Optional[float] = Field(default=None, ge=-90, le=90, description="Observer latitude")
    longitude: Optional[float] = Field(default=None, ge=-180, le=180, description="Observer longitude")
    include_images: bool = Field(default=True, description="Collect image candidates")

    def to_subject(self) -> SubjectQuery:
        return SubjectQuery.for_name(
            self.name,
            kind=SubjectKind.PLANT,
            latitude=self.latitude,
            longitude=self.longitude
        )


class IdentifyPlantQuery(BaseModel):
    """Query for identifying a plant from image bytes."""

    image: bytes = Field(..., repr=False, description="Raw image bytes")
    mime_type: str = Field(default="image/jpeg", description="Uploaded image MIME type")
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    max_suggestions: int = Field(default=5, ge=1, le=10, description="Ranked suggestions returned")

    def to_subject(self) -> SubjectQuery:
        return SubjectQuery.for_image(
            self.image,
            mime_type=self.mime_type,
            latitude=self.latitude,
            longitude=self.longitude
        )


class SuggestPlantsQuery(BaseModel):
    q: str = Field(..., min_length=1, max_length=100, description="Partial plant name")
    limit: int = Field(default=10, ge=1, le=20)


class PlantDistributionQuery(BaseModel):
    gbif_id: int = Field(..., gt=0, description="GBIF taxon key")
    limit: int = Field(default=300, ge=1, le=300, description="Occurrences fetched before deduplication")
