# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/wikimedia_client.py
# 🧭 Purpose (Layman Explanation):
# Searches Wikimedia Commons, a free library of scientific photos, for pictures of a plant or disease
# 🧪 Purpose (Technical Summary):
# Primary media search: list=search in the File namespace, then prop=imageinfo per hit to resolve
# URL and thumbnail; hits whose info lookup fails are skipped
# 🔗 Dependencies:
# re, APIClient, ImageCandidate, shared exceptions
# 🔄 Connected Modules / Calls From:
# ImageAggregator (primary provider)

import re
from typing import Any, Dict, List, Optional

from plantscope.shared.core.exceptions import ProviderAuthError, ProviderError
from plantscope.shared.infrastructure.external_apis import APIClient
from plantscope.shared.utils.logging import get_logger

from ...domain.models.images import ImageCandidate
from .base import ProviderClient

logger = get_logger(__name__)

FILE_NAMESPACE = 6
THUMBNAIL_WIDTH = 400
EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")


def caption_from_title(title: str) -> str:
    """'File:Quercus alba leaf.jpg' -> 'Quercus alba leaf'"""
    return EXTENSION_PATTERN.sub("", title.replace("File:", "", 1)).strip()


class WikimediaClient(ProviderClient):
    """Primary (free, scientific) media search provider."""

    name = "wikimedia"

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "WikimediaClient":
        return cls(APIClient(
            base_url=config["api_url"],
            api_name=cls.name,
            timeout=timeout,
            requires_key=False
        ))

    async def search_files(self, query: str, limit: int = 3) -> List[Dict[str, Any]]:
        response = await self.api_client.get(params={
            "action": "query",
            "format": "json",
            "list": "search",
            "srsearch": query,
            "srnamespace": FILE_NAMESPACE,
            "srlimit": limit,
        })
        hits = (response.get("query") or {}).get("search") if isinstance(response, dict) else None
        return hits if isinstance(hits, list) else []

    async def image_info(self, title: str) -> Optional[Dict[str, Any]]:
        response = await self.api_client.get(params={
            "action": "query",
            "format": "json",
            "prop": "imageinfo",
            "iiprop": "url|size",
            "iiurlwidth": THUMBNAIL_WIDTH,
            "titles": title,
        })
        pages = (response.get("query") or {}).get("pages") if isinstance(response, dict) else None
        if not isinstance(pages, dict) or not pages:
            return None
        page = next(iter(pages.values()))
        info = (page or {}).get("imageinfo") or []
        return info[0] if info and info[0].get("url") else None

    async def search_images(self, query: str, limit: int = 3) -> List[ImageCandidate]:
        candidates: List[ImageCandidate] = []

        for hit in await self.search_files(query, limit):
            title = hit.get("title")
            if not title:
                continue
            try:
                info = await self.image_info(title)
            except ProviderAuthError:
                raise
            except ProviderError as e:
                logger.warning(f"Image info lookup failed for {title}: {e}", extra={"provider": self.name})
                continue
            if not info:
                continue

            candidates.append(ImageCandidate(
                id=f"wiki_{hit.get('pageid', title)}",
                url=info["url"],
                thumbnail_url=info.get("thumburl") or info["url"],
                caption=caption_from_title(title),
                source_provider=self.name,
                keywords=f"{title} {hit.get('snippet', '')}"
            ))

        return candidates
