from typing import Any, Dict, List, Optional

import pytest

from plantscope.modules.plant_lookup.infrastructure.external.gbif_client import GbifClient
from plantscope.modules.plant_lookup.infrastructure.external.gemini_client import GeminiClient
from plantscope.modules.plant_lookup.infrastructure.external.perplexity_client import PerplexityClient
from plantscope.modules.plant_lookup.infrastructure.external.plant_id_client import PlantIdClient
from plantscope.modules.plant_lookup.infrastructure.external.unsplash_client import UnsplashClient
from plantscope.modules.plant_lookup.infrastructure.external.wikimedia_client import (
    WikimediaClient,
    caption_from_title,
)
from plantscope.shared.core.exceptions import ProviderAuthError, ProviderTransportError


class StubAPIClient:
    """Records calls and answers from a queue of canned responses."""

    def __init__(self, *responses: Any, api_key: Optional[str] = "key", requires_key: bool = False):
        self.responses: List[Any] = list(responses)
        self.api_key = api_key
        self.requires_key = requires_key
        self.calls: List[Dict[str, Any]] = []

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) or not self.requires_key

    def ensure_configured(self):
        if not self.is_configured:
            raise ProviderAuthError(provider="stub")

    async def get(self, endpoint: str = "", params=None, headers=None, timeout=None):
        self.calls.append({"method": "GET", "endpoint": endpoint, "params": params})
        return self.responses.pop(0)

    async def post(self, endpoint: str = "", data=None, params=None, headers=None, timeout=None):
        self.calls.append({"method": "POST", "endpoint": endpoint, "data": data, "params": params})
        return self.responses.pop(0)


@pytest.mark.asyncio
async def test_gemini_returns_candidate_text():
    api = StubAPIClient({"candidates": [{"content": {"parts": [{"text": "{\"a\": 1}"}]}}]})

    assert await GeminiClient(api).generate("prompt") == '{"a": 1}'
    assert api.calls[0]["endpoint"] == "models/gemini-1.5-flash:generateContent"
    assert api.calls[0]["params"] == {"key": "key"}


@pytest.mark.asyncio
async def test_gemini_rejects_unexpected_shapes():
    with pytest.raises(ProviderTransportError):
        await GeminiClient(StubAPIClient({"candidates": []})).generate("prompt")


@pytest.mark.asyncio
async def test_perplexity_checks_key_prefix_before_calling():
    api = StubAPIClient(api_key="sk-wrong", requires_key=True)

    with pytest.raises(ProviderAuthError):
        await PerplexityClient(api).complete("prompt")
    assert api.calls == []


@pytest.mark.asyncio
async def test_perplexity_sends_system_prompt():
    api = StubAPIClient({"choices": [{"message": {"content": "answer"}}]}, api_key="pplx-123", requires_key=True)

    assert await PerplexityClient(api).complete("prompt", system_prompt="be brief") == "answer"
    messages = api.calls[0]["data"]["messages"]
    assert messages[0] == {"role": "system", "content": "be brief"}
    assert messages[1] == {"role": "user", "content": "prompt"}


@pytest.mark.asyncio
async def test_gbif_match_none_is_empty():
    api = StubAPIClient({"matchType": "NONE", "confidence": 100})
    assert await GbifClient(api).match("Nothing") == {}


@pytest.mark.asyncio
async def test_gbif_occurrences_unwraps_results():
    api = StubAPIClient({"results": [{"decimalLatitude": 1.0}], "count": 1})

    assert await GbifClient(api).occurrences(2880539, limit=5) == [{"decimalLatitude": 1.0}]
    assert api.calls[0]["params"]["taxonKey"] == 2880539


@pytest.mark.asyncio
async def test_plant_id_sends_base64_image_and_coordinates():
    api = StubAPIClient({"suggestions": []}, requires_key=True)

    await PlantIdClient(api).identify(b"abc", latitude=1.5, longitude=2.5)

    payload = api.calls[0]["data"]
    assert payload["images"] == ["YWJj"]
    assert payload["latitude"] == 1.5
    assert "gbif_id" in payload["plant_details"]


@pytest.mark.asyncio
async def test_plant_id_rejects_responses_without_suggestions():
    with pytest.raises(ProviderTransportError):
        await PlantIdClient(StubAPIClient({"error": "quota"})).identify(b"abc")


@pytest.mark.asyncio
async def test_wikimedia_builds_candidates_from_search_and_imageinfo():
    api = StubAPIClient(
        {"query": {"search": [
            {"title": "File:Quercus alba leaf.jpg", "pageid": 42, "snippet": "white oak leaf"},
            {"title": "File:Missing.jpg", "pageid": 43},
        ]}},
        {"query": {"pages": {"42": {"imageinfo": [
            {"url": "https://upload.example.org/oak.jpg", "thumburl": "https://upload.example.org/oak_400.jpg"}
        ]}}}},
        {"query": {"pages": {"-1": {"missing": ""}}}},
    )

    candidates = await WikimediaClient(api).search_images("Quercus alba botanical")

    assert len(candidates) == 1
    candidate = candidates[0]
    assert candidate.id == "wiki_42"
    assert candidate.caption == "Quercus alba leaf"
    assert candidate.thumbnail_url == "https://upload.example.org/oak_400.jpg"
    assert "white oak leaf" in candidate.keywords
    assert caption_from_title("File:Rosa.gallica.png") == "Rosa.gallica"


@pytest.mark.asyncio
async def test_unsplash_skips_photos_without_urls():
    api = StubAPIClient({"results": [
        {
            "id": "abc",
            "urls": {"regular": "https://images.unsplash.com/abc", "small": "https://images.unsplash.com/abc-s"},
            "alt_description": "green leaves",
            "tags": [{"title": "plant"}],
        },
        {"id": "def", "urls": {}},
    ]}, requires_key=True)

    candidates = await UnsplashClient(api).search_images("oak", limit=2)

    assert [c.id for c in candidates] == ["unsplash_abc"]
    assert candidates[0].keywords == "green leaves plant"
    assert api.calls[0]["params"]["per_page"] == 2
