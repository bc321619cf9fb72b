# 📄 File: plantscope/modules/plant_lookup/domain/services/record_normalizer.py
# 🧭 Purpose (Layman Explanation):
# Every data source names and wraps its facts differently; this translates each answer into
# the one common fact-sheet layout used everywhere else
# 🧪 Purpose (Technical Summary):
# Record Normalizer: pure, total projection of a raw provider response through a mapping table.
# Structural {value: ...} envelope unwrap, nested sub-objects kept as dicts, placeholders dropped,
# optional list/text coercion. Never raises.
# 🔗 Dependencies:
# re, typing, plant_lookup.domain.models.record
# 🔄 Connected Modules / Calls From:
# fallback orchestrator, image identification seeding in query handlers

"""
Record Normalizer

Envelope detection is structural: a dict is an envelope when it has a
"value" key and every other key is provenance metadata (citation,
license, language, source). Anything else with several keys is treated
as a set of named sub-properties and normalized key by key.
"""

import re
from typing import Any, Dict, Iterable, Optional

from ..models.record import get_path, is_empty, set_path

ENVELOPE_PAYLOAD_KEY = "value"
ENVELOPE_METADATA_KEYS = frozenset({
    "citation",
    "license_name",
    "license_url",
    "language",
    "source",
    "entity_id",
})

LIST_SPLIT_PATTERN = re.compile(r"\s*[,;]\s*")

COERCE_LIST = "list"
COERCE_TEXT = "text"


def is_envelope(value: Any) -> bool:
    if not isinstance(value, dict) or ENVELOPE_PAYLOAD_KEY not in value:
        return False
    return all(key == ENVELOPE_PAYLOAD_KEY or key in ENVELOPE_METADATA_KEYS for key in value)


def unwrap(value: Any, placeholders: Iterable[str] = ()) -> Any:
    """
    Turn one raw JSON value into its canonical shape.

    Returns None for anything that should be treated as absent.
    """
    placeholder_set = {p.lower() for p in placeholders}
    return _unwrap(value, placeholder_set)


def _unwrap(value: Any, placeholders: set) -> Any:
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text or text.lower() in placeholders:
            return None
        return text

    if isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, list):
        items = [_unwrap(item, placeholders) for item in value]
        items = [item for item in items if not is_empty(item)]
        return items or None

    if isinstance(value, dict):
        if is_envelope(value):
            return _unwrap(value[ENVELOPE_PAYLOAD_KEY], placeholders)
        nested = {}
        for key, item in value.items():
            item = _unwrap(item, placeholders)
            if not is_empty(item):
                nested[str(key)] = item
        return nested or None

    # malformed shapes degrade to an opaque string
    return _unwrap(str(value), placeholders)


def coerce(value: Any, coercion: Optional[str], placeholders: Iterable[str] = ()) -> Any:
    if value is None or coercion is None:
        return value

    placeholder_set = {p.lower() for p in placeholders}

    if coercion == COERCE_LIST:
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            parts = [part.strip() for part in LIST_SPLIT_PATTERN.split(value)]
            parts = [part for part in parts if part and part.lower() not in placeholder_set]
            return parts or None
        return [value]

    if coercion == COERCE_TEXT:
        if isinstance(value, list):
            joined = "; ".join(str(item) for item in value if not isinstance(item, (dict, list)))
            return joined or None
        return value

    return value


def normalize(
    raw: Any,
    mapping: Dict[str, Any],
    placeholders: Iterable[str] = ()
) -> Dict[str, Any]:
    """
    Project a raw provider response into a canonical fragment.

    Args:
        raw: Provider response (any JSON value)
        mapping: canonical dotted path -> raw dotted path or (raw path, coercion)
        placeholders: filler strings treated as absent

    Returns:
        Fragment dict containing only mapped, present fields
    """
    fragment: Dict[str, Any] = {}
    if not isinstance(raw, (dict, list)):
        return fragment

    placeholders = list(placeholders)

    for canonical_path, rule in mapping.items():
        if isinstance(rule, (tuple, list)):
            raw_path, coercion = rule[0], (rule[1] if len(rule) > 1 else None)
        else:
            raw_path, coercion = rule, None

        try:
            value = unwrap(get_path(raw, raw_path), placeholders)
            value = coerce(value, coercion, placeholders)
        except (TypeError, ValueError, RecursionError):
            value = None

        if not is_empty(value):
            set_path(fragment, canonical_path, value)

    return fragment


def restrict_to_fields(fragment: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Keep only the top-level canonical fields owned by a field group."""
    allowed = set(fields)
    return {key: value for key, value in fragment.items() if key in allowed}
