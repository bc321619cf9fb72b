# 📄 File: plantscope/modules/plant_lookup/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web addresses the app calls for plants: look up by name, identify from a photo, get name
# suggestions while typing, and see where a plant grows
# 🧪 Purpose (Technical Summary):
# FastAPI router for plant lookup, image identification (multipart upload validated by size and
# Pillow decode), GBIF autocomplete and occurrence distribution
# 🔗 Dependencies:
# FastAPI, Pillow, application queries and handlers, response schemas
# 🔄 Connected Modules / Calls From:
# plantscope.api.v1.router

"""
Plants API Endpoints

- GET  /lookup: plant record + images (+ weather with coordinates)
- POST /identify: identify a plant from an uploaded photo
- GET  /suggest: autocomplete over accepted plant species
- GET  /{gbif_id}/distribution: deduplicated occurrence points
"""

import io
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from PIL import Image, UnidentifiedImageError

from plantscope.shared.config.settings import Settings, get_settings
from plantscope.shared.core.exceptions import InvalidInputError
from plantscope.shared.utils.logging import get_logger

from ....application.handlers import (
    IdentifyPlantQueryHandler,
    LookupPlantQueryHandler,
    PlantDistributionQueryHandler,
    SuggestPlantsQueryHandler,
)
from ....application.queries import (
    IdentifyPlantQuery,
    LookupPlantQuery,
    PlantDistributionQuery,
    SuggestPlantsQuery,
)
from ...dependencies import (
    get_identify_plant_handler,
    get_lookup_plant_handler,
    get_plant_distribution_handler,
    get_suggest_plants_handler,
)
from ..schemas import DistributionPointResponse, IdentifyResponse, LookupResponse, PlantSuggestionResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/plants", tags=["Plants"])


def validate_image(content: bytes, max_size: int) -> str:
    """Check size and decodability; returns the MIME type Pillow detected."""
    if not content:
        raise InvalidInputError(message="Uploaded image is empty", field="image")
    if len(content) > max_size:
        raise InvalidInputError(
            message=f"Image exceeds the maximum size of {max_size // (1024 * 1024)}MB",
            field="image",
            details={"size": len(content), "max_size": max_size}
        )
    try:
        with Image.open(io.BytesIO(content)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidInputError(message="Uploaded file is not a valid image", field="image") from e
    return Image.MIME.get(image_format, "image/jpeg")


@router.get(
    "/lookup",
    response_model=LookupResponse,
    summary="Look up a plant by name",
    responses={
        400: {"description": "Missing or blank name"},
        502: {"description": "No provider returned any data"},
    },
)
async def lookup_plant(
    name: str = Query(..., max_length=200, description="Scientific or common name"),
    lat: Optional[float] = Query(None, ge=-90, le=90, description="Latitude for weather context"),
    lon: Optional[float] = Query(None, ge=-180, le=180, description="Longitude for weather context"),
    handler: LookupPlantQueryHandler = Depends(get_lookup_plant_handler),
) -> LookupResponse:
    result = await handler.handle(LookupPlantQuery(name=name, latitude=lat, longitude=lon))
    return LookupResponse.from_result(result)


@router.post(
    "/identify",
    response_model=IdentifyResponse,
    summary="Identify a plant from a photo",
    responses={
        400: {"description": "Empty, oversized or undecodable image"},
        502: {"description": "Identification provider failed"},
        503: {"description": "Identification provider not configured"},
    },
)
async def identify_plant(
    image: UploadFile = File(..., description="Plant photo"),
    lat: Optional[float] = Form(None, ge=-90, le=90),
    lon: Optional[float] = Form(None, ge=-180, le=180),
    handler: IdentifyPlantQueryHandler = Depends(get_identify_plant_handler),
    settings: Settings = Depends(get_settings),
) -> IdentifyResponse:
    content = await image.read()
    mime_type = validate_image(content, settings.MAX_IMAGE_SIZE)

    logger.info(
        f"Identification requested for {image.filename}",
        extra={"file_size": len(content), "content_type": mime_type}
    )

    result = await handler.handle(IdentifyPlantQuery(
        image=content,
        mime_type=mime_type,
        latitude=lat,
        longitude=lon
    ))
    return IdentifyResponse.from_result(result)


@router.get("/suggest", response_model=List[PlantSuggestionResponse], summary="Autocomplete plant names")
async def suggest_plants(
    q: str = Query(..., min_length=1, max_length=100, description="Partial plant name"),
    handler: SuggestPlantsQueryHandler = Depends(get_suggest_plants_handler),
) -> List[PlantSuggestionResponse]:
    suggestions = await handler.handle(SuggestPlantsQuery(q=q))
    return [PlantSuggestionResponse(**s) for s in suggestions]


@router.get(
    "/{gbif_id}/distribution",
    response_model=List[DistributionPointResponse],
    status_code=status.HTTP_200_OK,
    summary="Observed distribution of a plant",
)
async def plant_distribution(
    gbif_id: int = Path(..., gt=0, description="GBIF taxon key"),
    handler: PlantDistributionQueryHandler = Depends(get_plant_distribution_handler),
) -> List[DistributionPointResponse]:
    points = await handler.handle(PlantDistributionQuery(gbif_id=gbif_id))
    return [DistributionPointResponse(**p) for p in points]
