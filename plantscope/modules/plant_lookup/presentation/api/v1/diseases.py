# 📄 File: plantscope/modules/plant_lookup/presentation/api/v1/diseases.py
# 🧭 Purpose (Layman Explanation):
# The web address the app calls to learn about a plant disease
# 🧪 Purpose (Technical Summary):
# FastAPI router for disease record lookup (record + images + manifest envelope) and name autocomplete
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router

from typing import List

from fastapi import APIRouter, Depends, Query

from ....application.handlers import LookupDiseaseQueryHandler, SuggestDiseasesQueryHandler
from ....application.queries import LookupDiseaseQuery, SuggestDiseasesQuery
from ...dependencies import get_lookup_disease_handler, get_suggest_diseases_handler
from ..schemas import DiseaseSuggestionResponse, LookupResponse

router = APIRouter(prefix="/diseases", tags=["Diseases"])


@router.get(
    "/lookup",
    response_model=LookupResponse,
    summary="Look up a plant disease by name",
    responses={
        400: {"description": "Missing or blank name"},
        502: {"description": "No provider returned any data"},
    },
)
async def lookup_disease(
    name: str = Query(..., max_length=200, description="Disease name"),
    handler: LookupDiseaseQueryHandler = Depends(get_lookup_disease_handler),
) -> LookupResponse:
    result = await handler.handle(LookupDiseaseQuery(name=name))
    return LookupResponse.from_result(result)


@router.get("/suggest", response_model=List[DiseaseSuggestionResponse], summary="Autocomplete disease names")
async def suggest_diseases(
    q: str = Query(..., min_length=1, max_length=100, description="Partial disease name"),
    limit: int = Query(10, ge=1, le=20),
    handler: SuggestDiseasesQueryHandler = Depends(get_suggest_diseases_handler),
) -> List[DiseaseSuggestionResponse]:
    suggestions = await handler.handle(SuggestDiseasesQuery(q=q, limit=limit))
    return [DiseaseSuggestionResponse(**s) for s in suggestions]
