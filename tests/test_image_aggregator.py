import pytest

from plantscope.modules.plant_lookup.domain.models.subject import SubjectKind
from plantscope.modules.plant_lookup.domain.services.image_aggregator import ImageAggregator
from plantscope.shared.config.settings import Settings

from .conftest import FakeMediaSearch, make_candidate

RELEVANCE_TERMS = {
    SubjectKind.PLANT: {"allow": ["plant", "leaf", "flower"], "deny": ["person", "food"]},
    SubjectKind.DISEASE: {"allow": ["disease", "fungus"], "deny": ["person"]},
}


def make_aggregator(primary, secondary=None):
    return ImageAggregator(primary=primary, secondary=secondary, relevance_terms=RELEVANCE_TERMS)


@pytest.mark.asyncio
async def test_primary_results_short_circuit_the_secondary_provider():
    primary = FakeMediaSearch("wikimedia", results={
        "Quercus alba botanical": [make_candidate(f"a{i}") for i in range(3)],
        "Quercus alba plant": [make_candidate(f"b{i}") for i in range(3)],
    })
    secondary = FakeMediaSearch("unsplash", default=[make_candidate("u1", provider="unsplash")])

    images = await make_aggregator(primary, secondary).aggregate("Quercus alba L.")

    assert [c.id for c in images] == ["a0", "a1", "a2", "b0"]
    assert primary.queries == ["Quercus alba botanical", "Quercus alba plant"]
    assert secondary.queries == []


@pytest.mark.asyncio
async def test_secondary_results_are_relevance_filtered():
    primary = FakeMediaSearch("wikimedia")
    secondary = FakeMediaSearch("unsplash", results={
        '"Quercus alba" plant': [
            make_candidate("u1", keywords="green leaf on a branch", provider="unsplash"),
            make_candidate("u2", keywords="plant held by a person", provider="unsplash"),
            make_candidate("u3", caption="Quercus alba in autumn", provider="unsplash"),
        ],
    })

    images = await make_aggregator(primary, secondary).aggregate("Quercus alba")

    assert [c.id for c in images] == ["u1", "u3"]
    assert len(secondary.queries) == 1


@pytest.mark.asyncio
async def test_few_primary_results_are_topped_up_without_duplicates():
    primary = FakeMediaSearch("wikimedia", results={"Quercus alba botanical": [make_candidate("a0")]})
    secondary = FakeMediaSearch("unsplash", default=[
        make_candidate("a0", keywords="oak leaf"),
        make_candidate("u1", keywords="oak leaf", provider="unsplash"),
    ])

    images = await make_aggregator(primary, secondary).aggregate("Quercus alba")

    assert [c.id for c in images] == ["a0", "u1"]


@pytest.mark.asyncio
async def test_unconfigured_secondary_is_skipped():
    primary = FakeMediaSearch("wikimedia", results={"Quercus alba plant": [make_candidate("a0")]})
    secondary = FakeMediaSearch("unsplash", default=[make_candidate("u1", keywords="leaf")], configured=False)

    images = await make_aggregator(primary, secondary).aggregate("Quercus alba")

    assert [c.id for c in images] == ["a0"]
    assert secondary.queries == []


@pytest.mark.asyncio
async def test_provider_failures_yield_no_images():
    def boom(query):
        raise RuntimeError("network down")

    primary = FakeMediaSearch("wikimedia", handler=boom)
    secondary = FakeMediaSearch("unsplash", handler=boom)

    images = await make_aggregator(primary, secondary).aggregate("Quercus alba")

    assert len(images) == 0
    assert len(primary.queries) == 2


@pytest.mark.asyncio
async def test_disease_names_are_cleaned_before_searching():
    primary = FakeMediaSearch("wikimedia")

    await make_aggregator(primary).aggregate("Powdery Mildew (fungal) disease", SubjectKind.DISEASE)

    assert primary.queries == ["Powdery Mildew plant disease", "Powdery Mildew pathology"]


def test_relevance_name_match_overrides_deny_terms():
    aggregator = make_aggregator(None)
    candidate = make_candidate("u1", caption="Quercus alba acorns as food", provider="unsplash")
    assert aggregator.is_relevant(candidate, "Quercus alba", SubjectKind.PLANT)
    other = make_candidate("u2", caption="Acorns as food", keywords="plant", provider="unsplash")
    assert not aggregator.is_relevant(other, "Quercus alba", SubjectKind.PLANT)


@pytest.fixture
def default_aggregator():
    settings = Settings()
    terms = {kind: settings.get_image_relevance_terms(kind.value) for kind in SubjectKind}
    return ImageAggregator(primary=FakeMediaSearch("wikimedia"), relevance_terms=terms)


@pytest.mark.parametrize("caption", [
    "red rose petals in bloom",
    "scarlet flower in a garden",
    "catkins on a hazel shrub",
    "mandevilla flower on a trellis",
    "wild herb meadow in Germany",
])
def test_default_terms_match_whole_words_only(default_aggregator, caption):
    candidate = make_candidate("u1", caption=caption, provider="unsplash")
    assert default_aggregator.is_relevant(candidate, "Quercus alba", SubjectKind.PLANT)


@pytest.mark.parametrize("caption", [
    "a man holding a flower",
    "two cats asleep in the garden",
    "potted plant on a car dashboard",
])
def test_default_deny_terms_still_veto(default_aggregator, caption):
    candidate = make_candidate("u1", caption=caption, provider="unsplash")
    assert not default_aggregator.is_relevant(candidate, "Quercus alba", SubjectKind.PLANT)


def test_default_disease_terms_accept_plural_symptoms(default_aggregator):
    candidate = make_candidate("u1", caption="brown leaf spots on tomato", provider="unsplash")
    assert default_aggregator.is_relevant(candidate, "Septoria leaf spot", SubjectKind.DISEASE)
