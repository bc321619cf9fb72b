import pytest

from plantscope.modules.plant_lookup.application.handlers import (
    CurrentWeatherQueryHandler,
    IdentifyPlantQueryHandler,
    LookupDiseaseQueryHandler,
    LookupPlantQueryHandler,
    PlantDistributionQueryHandler,
    SubjectAggregator,
    SuggestDiseasesQueryHandler,
    SuggestPlantsQueryHandler,
)
from plantscope.modules.plant_lookup.application.plans import PlanBuilder
from plantscope.modules.plant_lookup.application.queries import (
    CurrentWeatherQuery,
    IdentifyPlantQuery,
    LookupDiseaseQuery,
    LookupPlantQuery,
    PlantDistributionQuery,
    SuggestDiseasesQuery,
    SuggestPlantsQuery,
)
from plantscope.modules.plant_lookup.domain.services.fallback_orchestrator import FallbackOrchestrator
from plantscope.modules.plant_lookup.domain.services.image_aggregator import ImageAggregator
from plantscope.shared.config.settings import Settings
from plantscope.shared.core.exceptions import (
    InsufficientDataError,
    InvalidInputError,
    ProviderAuthError,
    ProviderTransportError,
)

from .conftest import FakeGbif, FakeGenerative, FakeMediaSearch, FakePlantId, FakeWeather, make_candidate, make_registry

PLACEHOLDERS = ["information not available", "not available", "unknown", "n/a"]

WEATHER_RESPONSE = {
    "name": "Urbana",
    "dt": 1760000000,
    "main": {"temp": 18.4, "humidity": 62, "pressure": 1016},
    "wind": {"speed": 3.1},
    "weather": [{"main": "Clear", "description": "clear sky"}],
}


def make_subjects(registry):
    return SubjectAggregator(
        FallbackOrchestrator(default_timeout=1.0, placeholders=PLACEHOLDERS),
        ImageAggregator(primary=registry.wikimedia, secondary=registry.unsplash),
        PlanBuilder(registry),
    )


@pytest.mark.asyncio
async def test_lookup_plant_combines_record_images_and_weather(plant_text, gbif_match):
    weather = FakeWeather(response=WEATHER_RESPONSE)
    registry = make_registry(
        gbif=FakeGbif(match_result=gbif_match),
        gemini=FakeGenerative("gemini", response=plant_text),
        wikimedia=FakeMediaSearch("wikimedia", default=[make_candidate("w1"), make_candidate("w2")]),
        openweather=weather,
    )

    result = await LookupPlantQueryHandler(make_subjects(registry)).handle(
        LookupPlantQuery(name="Quercus alba", latitude=40.1, longitude=-88.2)
    )

    record = result["record"]
    assert record["taxonomy"]["family"] == "Fagaceae"
    assert record["weather"]["temperature"] == 18.4
    assert record["weather"]["conditions"] == "Clear"
    assert record["usesByCategory"]["medicinal"] == ["Medicinal bark tea"]
    assert record["usesByCategory"]["wildlife"] == ["Wildlife food source"]
    assert "cultural" not in record["usesByCategory"]
    assert record["propagationNotes"] == ["Propagation is easiest from fresh acorns"]
    assert record["companionPlants"] == ["Good companion for hickories"]
    assert [c.id for c in result["images"]] == ["w1", "w2"]
    assert "weather" in result["manifest"].satisfied_groups
    assert weather.calls == 1


@pytest.mark.asyncio
async def test_lookup_without_coordinates_skips_weather(plant_text, gbif_match):
    weather = FakeWeather(response=WEATHER_RESPONSE)
    registry = make_registry(
        gbif=FakeGbif(match_result=gbif_match),
        gemini=FakeGenerative("gemini", response=plant_text),
        openweather=weather,
    )

    result = await LookupPlantQueryHandler(make_subjects(registry)).handle(
        LookupPlantQuery(name="Quercus alba", include_images=False)
    )

    assert "weather" not in result["record"]
    assert result["images"] == []
    assert weather.calls == 0


@pytest.mark.asyncio
async def test_lookup_plant_rejects_blank_names():
    with pytest.raises(InvalidInputError):
        await LookupPlantQueryHandler(make_subjects(make_registry())).handle(LookupPlantQuery(name="  "))


@pytest.mark.asyncio
async def test_identify_seeds_lookup_with_top_suggestion(plant_text):
    plant_id = FakePlantId(response={"suggestions": [
        {"plant_name": "Quercus rubra", "probability": 0.12, "plant_details": {"gbif_id": 2880456}},
        {"plant_name": None, "probability": 0.99},
        {
            "plant_name": "Quercus alba",
            "probability": 0.8712345,
            "plant_details": {
                "common_names": ["white oak"],
                "gbif_id": 2880539,
                "taxonomy": {"kingdom": "Plantae", "family": "Fagaceae", "genus": "Quercus"},
            },
            "similar_images": [{"url": "https://plant.id/similar/1.jpg"}, {"similarity": 0.5}],
        },
    ]})
    gbif = FakeGbif(species_result={"habitat": "Dry upland forest"})
    gemini = FakeGenerative("gemini", response=plant_text)
    registry = make_registry(plant_id=plant_id, gbif=gbif, gemini=gemini)

    handler = IdentifyPlantQueryHandler(registry, make_subjects(registry))
    result = await handler.handle(IdentifyPlantQuery(image=b"\x89PNG fake"))

    assert [s["name"] for s in result["suggestions"]] == ["Quercus alba", "Quercus rubra"]
    top = result["suggestions"][0]
    assert top["probability"] == 0.8712
    assert top["commonNames"] == ["white oak"]
    assert top["similarImages"] == ["https://plant.id/similar/1.jpg"]

    record = result["record"]
    # Plant.id answered first, so its common names win over the generative ones
    assert record["commonNames"] == ["white oak"]
    assert record["gbifId"] == 2880539
    assert record["taxonomy"]["order"] == "Fagales"
    assert gemini.calls and "Quercus alba" in gemini.calls[0]
    assert plant_id.calls == 1


@pytest.mark.asyncio
async def test_identify_failure_is_not_downgraded():
    registry = make_registry(plant_id=FakePlantId(error=ProviderAuthError(provider="plant_id")))
    handler = IdentifyPlantQueryHandler(registry, make_subjects(registry))

    with pytest.raises(ProviderAuthError):
        await handler.handle(IdentifyPlantQuery(image=b"image"))


@pytest.mark.asyncio
async def test_identify_without_suggestions_raises_insufficient_data():
    registry = make_registry(plant_id=FakePlantId(response={"suggestions": []}))
    handler = IdentifyPlantQueryHandler(registry, make_subjects(registry))

    with pytest.raises(InsufficientDataError) as excinfo:
        await handler.handle(IdentifyPlantQuery(image=b"image"))
    assert excinfo.value.details["missing_groups"] == ["identification"]


@pytest.mark.asyncio
async def test_suggest_keeps_plants_only():
    registry = make_registry(gbif=FakeGbif(suggest_results=[
        {
            "key": 2880539, "scientificName": "Quercus alba L.", "kingdom": "Plantae",
            "family": "Fagaceae", "genus": "Quercus", "species": "Quercus alba",
            "vernacularNames": [{"vernacularName": "white oak"}, {"language": "en"}],
        },
        {"key": 1, "scientificName": "Quercusia quercus", "kingdom": "Animalia", "class": "Insecta"},
        {"key": 2, "scientificName": "Bryopsida sp.", "class": "Bryopsida plantae"},
    ]))

    suggestions = await SuggestPlantsQueryHandler(registry).handle(SuggestPlantsQuery(q="quer"))

    assert [s["key"] for s in suggestions] == [2880539, 2]
    assert suggestions[0]["commonNames"] == ["white oak"]
    assert suggestions[1]["commonNames"] == []


@pytest.mark.asyncio
async def test_distribution_deduplicates_coordinates():
    registry = make_registry(gbif=FakeGbif(occurrence_results=[
        {"decimalLatitude": 40.1, "decimalLongitude": -88.2, "country": "United States", "locality": "Urbana"},
        {"decimalLatitude": 40.1, "decimalLongitude": -88.2, "country": "United States"},
        {"decimalLatitude": 45.5, "decimalLongitude": -73.6},
        {"country": "Canada"},
    ]))

    points = await PlantDistributionQueryHandler(registry).handle(PlantDistributionQuery(gbif_id=2880539))

    assert points == [
        {"location": "United States", "latitude": 40.1, "longitude": -88.2,
         "description": "Found in United States, Urbana"},
        {"location": "Unknown Location", "latitude": 45.5, "longitude": -73.6,
         "description": "Found in Unknown Location"},
    ]


@pytest.mark.asyncio
async def test_disease_lookup_returns_disease_record(disease_text):
    registry = make_registry(
        gemini=FakeGenerative("gemini", error=ProviderTransportError(provider="gemini")),
        perplexity=FakeGenerative("perplexity", response=disease_text),
    )

    result = await LookupDiseaseQueryHandler(make_subjects(registry)).handle(
        LookupDiseaseQuery(name="Powdery mildew disease", include_images=False)
    )

    assert result["record"]["symptoms"] == ["White powdery spots", "Leaf curling"]
    assert "usesByCategory" not in result["record"]
    assert result["manifest"].satisfied_groups == ["overview", "management"]


@pytest.mark.asyncio
async def test_current_weather_is_normalized():
    registry = make_registry(openweather=FakeWeather(response=WEATHER_RESPONSE))

    weather = await CurrentWeatherQueryHandler(registry, PLACEHOLDERS).handle(
        CurrentWeatherQuery(latitude=40.1, longitude=-88.2)
    )

    assert weather == {
        "temperature": 18.4,
        "humidity": 62,
        "conditions": "Clear",
        "description": "clear sky",
        "windSpeed": 3.1,
        "pressure": 1016,
        "observedAt": 1760000000,
        "location": "Urbana",
    }


@pytest.mark.asyncio
async def test_current_weather_propagates_provider_errors():
    registry = make_registry(openweather=FakeWeather(error=ProviderAuthError(provider="openweather")))

    with pytest.raises(ProviderAuthError):
        await CurrentWeatherQueryHandler(registry).handle(CurrentWeatherQuery(latitude=0, longitude=0))


@pytest.mark.asyncio
async def test_disease_suggest_matches_substrings_case_insensitively():
    handler = SuggestDiseasesQueryHandler(Settings().COMMON_DISEASES)

    suggestions = await handler.handle(SuggestDiseasesQuery(q="MILDEW"))
    assert suggestions == [
        {"name": "Powdery Mildew", "type": "disease"},
        {"name": "Downy Mildew", "type": "disease"},
    ]

    wilts = await handler.handle(SuggestDiseasesQuery(q="wilt", limit=2))
    assert [s["name"] for s in wilts] == ["Fusarium Wilt", "Verticillium Wilt"]

    assert await handler.handle(SuggestDiseasesQuery(q="  ")) == []
    assert await handler.handle(SuggestDiseasesQuery(q="chlorosis")) == []
