# 📄 File: plantscope/modules/plant_lookup/application/queries/disease_queries.py
# 🧭 Purpose (Layman Explanation):
# Describes the question "tell me about this plant disease"
# 🧪 Purpose (Technical Summary):
# Read-side queries for the disease record aggregation and disease-name autocomplete
# 🔄 Connected Modules / Calls From:
# application.handlers.query_handlers, presentation.api.v1.diseases

from pydantic import BaseModel, Field

from ...domain.models.subject import SubjectKind, SubjectQuery


class LookupDiseaseQuery(BaseModel):
    name: str = Field(..., max_length=200, description="Disease name",
                      examples=["Powdery mildew"])
    include_images: bool = Field(default=True)

    def to_subject(self) -> SubjectQuery:
        return SubjectQuery.for_name(self.name, kind=SubjectKind.DISEASE)


class SuggestDiseasesQuery(BaseModel):
    q: str = Field(..., min_length=1, max_length=100, description="Partial disease name")
    limit: int = Field(default=10, ge=1, le=20)
