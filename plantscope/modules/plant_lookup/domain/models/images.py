# 📄 File: plantscope/modules/plant_lookup/domain/models/images.py
# 🧭 Purpose (Layman Explanation):
# Describes a picture found for a plant or disease, and the small capped album that collects them without repeats
# 🧪 Purpose (Technical Summary):
# ImageCandidate entity and CandidateSet (insertion-ordered, size-capped, deduplicated by id OR url)
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# image aggregator, Wikimedia and Unsplash clients, response schemas

from typing import Iterator, List, Optional

from pydantic import BaseModel, Field


class ImageCandidate(BaseModel):
    """Image Candidate. Two candidates are duplicates when either id or url matches."""

    id: str
    url: str
    thumbnail_url: Optional[str] = None
    caption: Optional[str] = None
    source_provider: str

    # description/tags text used by relevance filtering, never serialized
    keywords: str = Field(default="", exclude=True)

    def is_duplicate_of(self, other: "ImageCandidate") -> bool:
        return self.id == other.id or self.url == other.url


class CandidateSet:
    """
    Ordered, capped, duplicate-free collection of image candidates.
    """

    def __init__(self, cap: int = 4):
        if cap < 0:
            raise ValueError("cap must be >= 0")
        self.cap = cap
        self._items: List[ImageCandidate] = []
        self._ids = set()
        self._urls = set()

    def add(self, candidate: ImageCandidate) -> bool:
        """Insert unless full or duplicate. Returns whether it was inserted."""
        if self.is_full:
            return False
        if candidate.id in self._ids or candidate.url in self._urls:
            return False
        self._items.append(candidate)
        self._ids.add(candidate.id)
        self._urls.add(candidate.url)
        return True

    def extend(self, candidates) -> int:
        return sum(1 for candidate in candidates if self.add(candidate))

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.cap

    def to_list(self) -> List[ImageCandidate]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ImageCandidate]:
        return iter(list(self._items))
