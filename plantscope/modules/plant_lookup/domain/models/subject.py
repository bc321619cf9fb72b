# 📄 File: plantscope/modules/plant_lookup/domain/models/subject.py
# 🧭 Purpose (Layman Explanation):
# Describes "what is being looked up": a plant or disease name, or a photo, plus an optional location
# 🧪 Purpose (Technical Summary):
# Immutable Subject Query value object validated at construction; empty names raise InvalidInputError
# 🔗 Dependencies:
# pydantic, enum, plantscope.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# query handlers, fallback orchestrator, plan builders, provider call descriptors

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from plantscope.shared.core.exceptions import InvalidInputError


class SubjectKind(str, Enum):
    """Kind of subject a lookup is about"""
    PLANT = "plant"
    DISEASE = "disease"


class SubjectQuery(BaseModel):
    """
    Subject Query value object.

    Carries either a name (scientific or common) or image bytes, never
    neither. Frozen so it can be shared across concurrent provider calls.
    """

    model_config = ConfigDict(frozen=True)

    kind: SubjectKind = SubjectKind.PLANT
    name: Optional[str] = None
    image: Optional[bytes] = Field(default=None, repr=False)
    image_mime_type: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    gbif_id: Optional[int] = None

    @classmethod
    def for_name(
        cls,
        name: Optional[str],
        kind: SubjectKind = SubjectKind.PLANT,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> "SubjectQuery":
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidInputError(
                message=f"A {kind.value} name is required",
                field="name",
                value=name
            )
        return cls(kind=kind, name=cleaned, latitude=latitude, longitude=longitude)

    @classmethod
    def for_image(
        cls,
        image: Optional[bytes],
        mime_type: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> "SubjectQuery":
        if not image:
            raise InvalidInputError(message="An image is required", field="image")
        return cls(
            kind=SubjectKind.PLANT,
            image=image,
            image_mime_type=mime_type,
            latitude=latitude,
            longitude=longitude
        )

    def with_identity(self, name: Optional[str], gbif_id: Optional[int] = None) -> "SubjectQuery":
        """Return a copy bound to an identified name (used after image identification)."""
        return self.model_copy(update={"name": name or self.name, "gbif_id": gbif_id or self.gbif_id})

    @property
    def is_empty(self) -> bool:
        return not (self.name and self.name.strip()) and not self.image

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
