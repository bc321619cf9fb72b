from plantscope.modules.plant_lookup.application.field_mappings import (
    GBIF_MATCH_MAPPING,
    GENERATIVE_PLANT_MAPPING,
    OPENWEATHER_MAPPING,
    PLANT_ID_MAPPING,
)
from plantscope.modules.plant_lookup.domain.services.record_normalizer import (
    COERCE_LIST,
    COERCE_TEXT,
    is_envelope,
    normalize,
    restrict_to_fields,
    unwrap,
)

PLACEHOLDERS = ["information not available", "not available", "unknown", "n/a"]


def test_envelope_detection_is_structural():
    assert is_envelope({"value": "x", "citation": "https://example.org"})
    assert is_envelope({"value": ["a"], "license_name": "CC BY-SA", "license_url": "https://cc"})
    assert not is_envelope({"value": 1, "unit": "cm"})
    assert not is_envelope({"citation": "no payload"})


def test_unwrap_handles_nested_envelopes_and_lists():
    raw = {"value": [{"value": "Seed", "citation": "c"}, "  Cuttings  ", ""], "citation": "c"}
    assert unwrap(raw) == ["Seed", "Cuttings"]


def test_placeholders_become_absent():
    assert unwrap("Information not available", PLACEHOLDERS) is None
    assert unwrap(["N/A", "Acorns"], PLACEHOLDERS) == ["Acorns"]


def test_malformed_shapes_degrade_to_string():
    assert unwrap(("odd", "tuple")) == "('odd', 'tuple')"


def test_plant_id_details_are_unwrapped_and_coerced():
    suggestion = {
        "plant_name": "Quercus alba",
        "probability": 0.93,
        "plant_details": {
            "common_names": ["white oak", "eastern white oak"],
            "description": {"value": "A large oak.", "citation": "https://en.wikipedia.org"},
            "wiki_description": {"value": "Quercus alba is an oak.", "license_name": "CC BY-SA 3.0"},
            "gbif_id": 2880539,
            "taxonomy": {"kingdom": "Plantae", "family": "Fagaceae", "genus": "Quercus"},
            "edible_parts": "acorns",
            "propagation_methods": None,
        },
    }
    fragment = normalize(suggestion, PLANT_ID_MAPPING, PLACEHOLDERS)
    assert fragment["scientificName"] == "Quercus alba"
    assert fragment["description"] == "A large oak."
    assert fragment["wikiDescription"] == "Quercus alba is an oak."
    assert fragment["gbifId"] == 2880539
    assert fragment["taxonomy"] == {"kingdom": "Plantae", "family": "Fagaceae", "genus": "Quercus"}
    assert fragment["safety"] == {"edibleParts": ["acorns"]}


def test_generative_plant_mapping(plant_record):
    fragment = normalize(plant_record, GENERATIVE_PLANT_MAPPING, PLACEHOLDERS)
    assert fragment["commonNames"] == ["White oak", "Eastern white oak"]
    assert fragment["morphology"]["height"] == "20-30 m"
    assert "spread" not in fragment["morphology"]
    assert "habitat" not in fragment
    assert "threats" not in fragment
    assert fragment["safety"]["edibleParts"] == ["Acorns (leached)"]


def test_coercions():
    raw = {"names": "a, b; c", "parts": ["one", "two"]}
    mapping = {"names": ("names", COERCE_LIST), "parts": ("parts", COERCE_TEXT)}
    assert normalize(raw, mapping) == {"names": ["a", "b", "c"], "parts": "one; two"}


def test_list_indexes_in_raw_paths():
    raw = {"main": {"temp": 21.5, "humidity": 40}, "weather": [{"main": "Clouds", "description": "few clouds"}]}
    fragment = normalize(raw, OPENWEATHER_MAPPING)
    assert fragment["weather"]["temperature"] == 21.5
    assert fragment["weather"]["conditions"] == "Clouds"
    assert fragment["weather"]["description"] == "few clouds"


def test_non_dict_raw_yields_empty_fragment():
    assert normalize("plain text", GBIF_MATCH_MAPPING) == {}
    assert normalize(None, GBIF_MATCH_MAPPING) == {}


def test_restrict_to_fields_keeps_group_fields_only():
    fragment = {"taxonomy": {"genus": "Quercus"}, "nativeRange": "NA", "facts": ["x"]}
    assert restrict_to_fields(fragment, ["taxonomy", "scientificName"]) == {"taxonomy": {"genus": "Quercus"}}


def test_normalizing_twice_gives_identical_fragments(plant_record):
    first = normalize(plant_record, GENERATIVE_PLANT_MAPPING, PLACEHOLDERS)
    assert normalize(plant_record, GENERATIVE_PLANT_MAPPING, PLACEHOLDERS) == first
