# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/unsplash_client.py
# 🧭 Purpose (Layman Explanation):
# Backup picture source: searches the Unsplash stock-photo site when the scientific library had too few images
# 🧪 Purpose (Technical Summary):
# Secondary media search client (Client-ID auth); maps photos to ImageCandidates carrying the
# description/tags text needed by the aggregator's relevance filter
# 🔗 Dependencies:
# APIClient, ImageCandidate
# 🔄 Connected Modules / Calls From:
# ImageAggregator (secondary provider)

from typing import Any, Dict, List

from plantscope.shared.infrastructure.external_apis import APIClient

from ...domain.models.images import ImageCandidate
from .base import ProviderClient


def keywords_for(photo: Dict[str, Any]) -> str:
    description = photo.get("description") or photo.get("alt_description") or ""
    tags = " ".join(
        (tag.get("title") or "") for tag in (photo.get("tags") or []) if isinstance(tag, dict)
    )
    return f"{description} {tags}".strip()


class UnsplashClient(ProviderClient):
    """Secondary (stock-photo) media search provider."""

    name = "unsplash"

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "UnsplashClient":
        api_key = config.get("api_key")
        return cls(APIClient(
            base_url=config["api_url"],
            api_name=cls.name,
            api_key=api_key,
            timeout=timeout,
            requires_key=True,
            default_headers={"Authorization": f"Client-ID {api_key}"} if api_key else None
        ))

    async def search_images(self, query: str, limit: int = 3) -> List[ImageCandidate]:
        response = await self.api_client.get(
            "search/photos",
            params={"query": query, "per_page": limit, "orientation": "all"}
        )
        results = response.get("results") if isinstance(response, dict) else None

        candidates: List[ImageCandidate] = []
        for photo in results or []:
            urls = photo.get("urls") or {}
            url = urls.get("regular") or urls.get("full")
            if not photo.get("id") or not url:
                continue
            candidates.append(ImageCandidate(
                id=f"unsplash_{photo['id']}",
                url=url,
                thumbnail_url=urls.get("small") or url,
                caption=photo.get("alt_description") or photo.get("description"),
                source_provider=self.name,
                keywords=keywords_for(photo)
            ))
        return candidates
