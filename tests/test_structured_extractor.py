import pytest

from plantscope.modules.plant_lookup.domain.services.structured_extractor import (
    extract_structured_block,
    find_object_span,
)
from plantscope.shared.core.exceptions import (
    ExtractionError,
    MalformedStructuredBlockError,
    NoStructuredBlockFoundError,
)


def test_extracts_object_surrounded_by_prose(plant_text):
    data = extract_structured_block(plant_text)
    assert data["scientificName"] == "Quercus alba"
    assert data["taxonomy"]["family"] == "Fagaceae"


def test_braces_inside_strings_do_not_close_the_object():
    text = 'Answer: {"note": "use {curly} braces", "nested": {"a": "}"}} trailing {junk'
    assert extract_structured_block(text) == {"note": "use {curly} braces", "nested": {"a": "}"}}


def test_escaped_quotes_are_handled():
    text = r'{"quote": "he said \"hi {there}\"", "n": 1}'
    assert extract_structured_block(text)["n"] == 1


def test_first_object_wins_when_several_are_present():
    assert extract_structured_block('{"a": 1} and later {"b": 2}') == {"a": 1}


def test_no_object_raises_no_block_found():
    with pytest.raises(NoStructuredBlockFoundError) as excinfo:
        extract_structured_block("I could not find any information about that plant.")
    assert excinfo.value.error_code == "NO_STRUCTURED_BLOCK_FOUND"


def test_unbalanced_object_raises_no_block_found():
    assert find_object_span('{"a": {"b": 1}') is None
    with pytest.raises(NoStructuredBlockFoundError):
        extract_structured_block('prefix {"a": {"b": 1}')


def test_balanced_but_invalid_json_is_malformed():
    with pytest.raises(MalformedStructuredBlockError) as excinfo:
        extract_structured_block("{name: 'single quotes', trailing: 1,}")
    assert isinstance(excinfo.value, ExtractionError)
    assert excinfo.value.status_code == 502


def test_dict_input_passes_through_and_non_text_is_rejected():
    assert extract_structured_block({"already": "parsed"}) == {"already": "parsed"}
    with pytest.raises(NoStructuredBlockFoundError):
        extract_structured_block(None)


def test_nested_object_with_surrounding_text():
    assert extract_structured_block('prefix {"a":1,"b":{"c":2}} suffix') == {"a": 1, "b": {"c": 2}}
