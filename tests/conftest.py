import asyncio
import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest

from plantscope.modules.plant_lookup.domain.models.images import ImageCandidate


class FakeGenerative:
    """Stands in for both GeminiClient.generate and PerplexityClient.complete."""

    def __init__(self, name: str, response: Any = None, error: Optional[Exception] = None, delay: float = 0.0):
        self.name = name
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: List[str] = []

    async def generate(self, prompt: str) -> Any:
        return await self._answer(prompt)

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> Any:
        return await self._answer(prompt)

    async def _answer(self, prompt: str) -> Any:
        self.calls.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class FakeGbif:
    name = "gbif"

    def __init__(
        self,
        match_result: Optional[Dict[str, Any]] = None,
        species_result: Optional[Dict[str, Any]] = None,
        suggest_results: Optional[List[Dict[str, Any]]] = None,
        occurrence_results: Optional[List[Dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ):
        self.match_result = match_result or {}
        self.species_result = species_result or {}
        self.suggest_results = suggest_results or []
        self.occurrence_results = occurrence_results or []
        self.error = error
        self.calls: List[tuple] = []

    async def match(self, name: str) -> Dict[str, Any]:
        self.calls.append(("match", name))
        if self.error is not None:
            raise self.error
        return self.match_result

    async def species(self, key) -> Dict[str, Any]:
        self.calls.append(("species", key))
        if self.error is not None:
            raise self.error
        return self.species_result

    async def suggest(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        self.calls.append(("suggest", query))
        return self.suggest_results

    async def occurrences(self, taxon_key, limit: int = 300) -> List[Dict[str, Any]]:
        self.calls.append(("occurrences", taxon_key))
        return self.occurrence_results


class FakeMediaSearch:
    """Media search provider answering per query string (or via a callable)."""

    def __init__(
        self,
        name: str,
        results: Optional[Dict[str, List[ImageCandidate]]] = None,
        default: Optional[List[ImageCandidate]] = None,
        configured: bool = True,
        handler: Optional[Callable[[str], List[ImageCandidate]]] = None,
    ):
        self.name = name
        self.results = results or {}
        self.default = default or []
        self.configured = configured
        self.handler = handler
        self.queries: List[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def search_images(self, query: str, limit: int = 3) -> List[ImageCandidate]:
        self.queries.append(query)
        if self.handler is not None:
            return self.handler(query)
        return list(self.results.get(query, self.default))[:limit]


class FakePlantId:
    name = "plant_id"

    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.response = response or {"suggestions": []}
        self.error = error
        self.calls = 0

    async def identify(self, image: bytes, latitude=None, longitude=None, details=None) -> Dict[str, Any]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.response


class FakeWeather:
    name = "openweather"

    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.response = response or {}
        self.error = error
        self.calls = 0

    async def current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.response


def make_candidate(
    image_id: str,
    caption: str = "",
    keywords: str = "",
    provider: str = "wikimedia",
    url: Optional[str] = None,
) -> ImageCandidate:
    url = url or f"https://images.example.org/{image_id}.jpg"
    return ImageCandidate(
        id=image_id,
        url=url,
        thumbnail_url=url.replace(".jpg", "_thumb.jpg"),
        caption=caption,
        source_provider=provider,
        keywords=keywords,
    )


def make_registry(**overrides) -> SimpleNamespace:
    """Registry-shaped namespace of fakes; plan builders only read attributes."""
    providers = {
        "plant_id": FakePlantId(),
        "gemini": FakeGenerative("gemini", error=RuntimeError("gemini not stubbed")),
        "perplexity": FakeGenerative("perplexity", error=RuntimeError("perplexity not stubbed")),
        "gbif": FakeGbif(),
        "wikimedia": FakeMediaSearch("wikimedia"),
        "unsplash": FakeMediaSearch("unsplash", configured=False),
        "openweather": FakeWeather(),
    }
    providers.update(overrides)
    return SimpleNamespace(**providers)


PLANT_RECORD = {
    "commonName": "White oak, Eastern white oak",
    "scientificName": "Quercus alba",
    "description": "A long-lived deciduous hardwood of eastern North America.",
    "synonyms": ["Quercus candida"],
    "taxonomy": {
        "kingdom": "Plantae",
        "phylum": "Tracheophyta",
        "class": "Magnoliopsida",
        "order": "Fagales",
        "family": "Fagaceae",
        "genus": "Quercus",
        "species": "Quercus alba",
    },
    "nativeRange": "Eastern and central North America",
    "conservationStatus": "Least Concern",
    "habitat": "Information not available",
    "threats": [],
    "facts": ["State tree of Illinois", "Acorns mature in one season"],
    "morphologicalCharacteristics": {
        "height": "20-30 m",
        "leaves": "Lobed, 10-20 cm",
        "flowers": "Catkins",
    },
    "cultivationRequirements": {"sunlight": "Full sun", "soilType": "Deep, well-drained"},
    "maintenanceGuidelines": {"pruning": "Prune in late winter"},
    "safety": {"edibleParts": "Acorns (leached)", "propagationMethods": ["Seed"]},
    "practicalUses": ["Medicinal bark tea", "Ornamental shade tree", "Wildlife food source"],
    "additionalInformation": ["Propagation is easiest from fresh acorns", "Good companion for hickories"],
}


@pytest.fixture
def plant_record() -> Dict[str, Any]:
    return json.loads(json.dumps(PLANT_RECORD))


@pytest.fixture
def plant_text(plant_record) -> str:
    """Model output with prose and a code fence around the JSON object."""
    return "Here is the information you asked for:\n```json\n" + json.dumps(plant_record) + "\n```\nHope this helps!"


@pytest.fixture
def gbif_match() -> Dict[str, Any]:
    return {
        "usageKey": 2880539,
        "scientificName": "Quercus alba L.",
        "canonicalName": "Quercus alba",
        "rank": "SPECIES",
        "matchType": "EXACT",
        "kingdom": "Plantae",
        "phylum": "Tracheophyta",
        "class": "Magnoliopsida",
        "order": "Fagales",
        "family": "Fagaceae",
        "genus": "Quercus",
        "species": "Quercus alba",
    }


@pytest.fixture
def disease_text() -> str:
    return json.dumps({
        "diseaseName": "Powdery mildew",
        "scientificName": "Erysiphales",
        "commonNames": "White mold; Oidium",
        "overview": "A fungal disease producing white powdery growth on leaves.",
        "symptoms": ["White powdery spots", "Leaf curling"],
        "causes": ["Erysiphe spp."],
        "treatment": {"chemical": ["Sulfur sprays"], "organic": "Neem oil, potassium bicarbonate"},
        "prevention": ["Improve air circulation"],
    })
