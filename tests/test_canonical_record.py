from plantscope.modules.plant_lookup.domain.models.images import CandidateSet
from plantscope.modules.plant_lookup.domain.models.record import CanonicalRecord, get_path, prune

from .conftest import make_candidate


def test_first_writer_wins_per_leaf():
    record = CanonicalRecord()
    record.merge({"taxonomy": {"family": "Fagaceae"}, "nativeRange": "North America"})
    contributed = record.merge({
        "taxonomy": {"family": "Rosaceae", "genus": "Quercus"},
        "nativeRange": "Europe",
        "habitat": "Upland forest",
    })

    assert record.get("taxonomy.family") == "Fagaceae"
    assert record.get("taxonomy.genus") == "Quercus"
    assert record.get("nativeRange") == "North America"
    assert sorted(contributed) == ["habitat", "taxonomy.genus"]


def test_empty_values_never_overwrite_and_can_be_filled():
    record = CanonicalRecord({"description": "", "synonyms": []})
    assert record.is_empty()

    record.merge({"description": None, "synonyms": ["Quercus candida"]})
    record.merge({"description": "A large oak."})
    assert record.to_dict() == {"description": "A large oak.", "synonyms": ["Quercus candida"]}


def test_set_if_absent_respects_existing_values():
    record = CanonicalRecord({"usesByCategory": {"medicinal": ["bark tea"]}})
    assert not record.set_if_absent("usesByCategory", {"ornamental": ["shade"]})
    assert record.set_if_absent("companionPlants", ["hickory"])
    assert record.get("companionPlants") == ["hickory"]
    assert "usesByCategory.medicinal" in record


def test_to_dict_omits_absent_fields():
    assert prune({"a": {"b": None, "c": ""}, "d": [None, ""], "e": 0}) == {"e": 0}
    assert get_path({"a": [{"b": 1}]}, "a.0.b") == 1
    assert get_path({"a": [{"b": 1}]}, "a.3.b") is None


def test_candidate_set_dedupes_by_id_or_url_and_caps():
    candidates = CandidateSet(cap=3)
    assert candidates.add(make_candidate("a"))
    assert not candidates.add(make_candidate("a", url="https://other.example/a.jpg"))
    assert not candidates.add(make_candidate("b", url="https://images.example.org/a.jpg"))
    assert candidates.extend([make_candidate("b"), make_candidate("c"), make_candidate("d")]) == 2

    assert [c.id for c in candidates] == ["a", "b", "c"]
    assert candidates.is_full
