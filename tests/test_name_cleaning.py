import pytest

from plantscope.modules.plant_lookup.domain.services.name_cleaning import (
    clean_disease_name,
    clean_scientific_name,
    to_search_term,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Quercus alba L.", "Quercus alba"),
        ("Rosa gallica L.", "Rosa gallica"),
        ("Acer saccharum Marshall", "Acer saccharum"),
        ("Foo bar (Smith) Jones, 1890", "Foo bar"),
        ("Brassica oleracea var. capitata L.", "Brassica oleracea var. capitata"),
        ("Mentha × piperita L.", "Mentha × piperita"),
        ("Quercus alba", "Quercus alba"),
        ("White oak", "White oak"),
        ("Quercus", "Quercus"),
        ("", ""),
    ],
)
def test_clean_scientific_name(raw, expected):
    assert clean_scientific_name(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Powdery Mildew disease", "Powdery Mildew"),
        ("Leaf Spot (fungal) infection", "Leaf Spot"),
        ("Fire blight", "Fire blight"),
        ("  Black   rot  ", "Black rot"),
    ],
)
def test_clean_disease_name(raw, expected):
    assert clean_disease_name(raw) == expected


def test_search_term_drops_punctuation():
    assert to_search_term("Brassica oleracea var. capitata") == "Brassica oleracea var capitata"
