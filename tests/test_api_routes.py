import io

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from PIL import Image

from plantscope.api.middleware.error_handling import error_info
from plantscope.main import create_application
from plantscope.modules.plant_lookup.presentation.dependencies import get_provider_registry
from plantscope.shared.core.exceptions import ProviderAuthError

from .conftest import FakeGbif, FakeGenerative, FakeMediaSearch, FakePlantId, FakeWeather, make_candidate, make_registry


def make_client(registry) -> TestClient:
    app = create_application()
    app.dependency_overrides[get_provider_registry] = lambda: registry
    return TestClient(app)


def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(34, 139, 34)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def registry(plant_text, gbif_match):
    return make_registry(
        gbif=FakeGbif(match_result=gbif_match),
        gemini=FakeGenerative("gemini", response=plant_text),
        wikimedia=FakeMediaSearch("wikimedia", default=[make_candidate(f"w{i}") for i in range(3)]),
    )


def test_lookup_returns_camel_case_envelope(registry):
    client = make_client(registry)

    response = client.get("/api/v1/plants/lookup", params={"name": "Quercus alba"})

    assert response.status_code == 200
    body = response.json()
    assert body["record"]["scientificName"] == "Quercus alba"
    assert body["record"]["taxonomy"]["genus"] == "Quercus"
    assert body["images"][0]["thumbnailUrl"] == "https://images.example.org/w0_thumb.jpg"
    assert body["images"][0]["sourceProvider"] == "wikimedia"
    assert "keywords" not in body["images"][0]
    assert body["manifest"]["satisfiedGroups"] == ["taxonomy", "profile", "nativeRange"]
    assert body["manifest"]["attempts"][0]["provider"] == "gbif"
    assert "X-Request-ID" in response.headers


def test_blank_name_is_a_client_error(registry):
    response = make_client(registry).get("/api/v1/plants/lookup", params={"name": "   "})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_INPUT"
    assert error["request_id"] == response.headers["X-Request-ID"]


def test_missing_name_is_a_validation_error(registry):
    response = make_client(registry).get("/api/v1/plants/lookup")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_all_providers_failing_is_bad_gateway():
    response = make_client(make_registry()).get("/api/v1/plants/lookup", params={"name": "Nonexistus plantus"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "INSUFFICIENT_DATA"


def test_identify_rejects_non_images(registry):
    response = make_client(registry).post(
        "/api/v1/plants/identify",
        files={"image": ("notes.txt", b"definitely not a picture", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


def test_identify_returns_suggestions(registry):
    registry.plant_id = FakePlantId(response={"suggestions": [
        {"plant_name": "Quercus alba", "probability": 0.91, "plant_details": {"gbif_id": 2880539}},
    ]})

    response = make_client(registry).post(
        "/api/v1/plants/identify",
        files={"image": ("oak.png", png_bytes(), "image/png")},
        data={"lat": "40.1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["suggestions"] == [{
        "name": "Quercus alba",
        "probability": 0.91,
        "commonNames": [],
        "gbifId": 2880539,
        "similarImages": [],
    }]
    assert body["record"]["gbifId"] == 2880539
    # only one coordinate: no weather
    assert "weather" not in body["record"]


def test_identify_provider_misconfiguration_is_unavailable(registry):
    registry.plant_id = FakePlantId(error=ProviderAuthError(provider="plant_id"))

    response = make_client(registry).post(
        "/api/v1/plants/identify",
        files={"image": ("oak.png", png_bytes(), "image/png")},
    )

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "PROVIDER_AUTH_FAILURE"


def test_suggest_and_distribution():
    registry = make_registry(gbif=FakeGbif(
        suggest_results=[{"key": 1, "scientificName": "Quercus alba L.", "kingdom": "Plantae"}],
        occurrence_results=[{"decimalLatitude": 1.0, "decimalLongitude": 2.0, "country": "Peru"}],
    ))
    client = make_client(registry)

    suggestions = client.get("/api/v1/plants/suggest", params={"q": "quer"}).json()
    assert suggestions[0]["scientificName"] == "Quercus alba L."

    points = client.get("/api/v1/plants/2880539/distribution").json()
    assert points == [{"location": "Peru", "latitude": 1.0, "longitude": 2.0, "description": "Found in Peru"}]

    assert client.get("/api/v1/plants/0/distribution").status_code == 422


def test_disease_lookup(disease_text):
    registry = make_registry(gemini=FakeGenerative("gemini", response=disease_text))

    response = make_client(registry).get("/api/v1/diseases/lookup", params={"name": "Powdery mildew"})

    assert response.status_code == 200
    assert response.json()["record"]["overview"].startswith("A fungal disease")


def test_weather_endpoint():
    registry = make_registry(openweather=FakeWeather(response={
        "name": "Lima", "main": {"temp": 19.0, "humidity": 80}, "wind": {"speed": 2.5},
        "weather": [{"main": "Clouds", "description": "overcast clouds"}],
    }))

    response = make_client(registry).get("/api/v1/weather", params={"lat": -12.05, "lon": -77.04})

    assert response.status_code == 200
    body = response.json()
    assert body["temperature"] == 19.0
    assert body["windSpeed"] == 2.5
    assert body["conditions"] == "Clouds"


def test_weather_without_key_is_unavailable():
    registry = make_registry(openweather=FakeWeather(error=ProviderAuthError(provider="openweather")))

    response = make_client(registry).get("/api/v1/weather", params={"lat": 0, "lon": 0})

    assert response.status_code == 503


def test_health_and_unknown_routes():
    client = make_client(make_registry())

    health = client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    missing = client.get("/api/v1/nowhere")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.parametrize("exc, expected", [
    (ProviderAuthError(provider="plant_id"), (503, "PROVIDER_AUTH_FAILURE")),
    (HTTPException(status_code=405), (405, "HTTP_405")),
    (RuntimeError("boom"), (500, "INTERNAL_SERVER_ERROR")),
])
def test_error_info_covers_every_exception_kind(exc, expected):
    status_code, error_code, message, details = error_info(exc)
    assert (status_code, error_code) == expected
    assert message and isinstance(details, dict)


def test_disease_suggest():
    client = make_client(make_registry())

    response = client.get("/api/v1/diseases/suggest", params={"q": "rot"})
    assert response.status_code == 200
    assert response.json() == [
        {"name": "Root Rot", "type": "disease"},
        {"name": "Crown Rot", "type": "disease"},
    ]

    assert client.get("/api/v1/diseases/suggest", params={"q": ""}).status_code == 422
