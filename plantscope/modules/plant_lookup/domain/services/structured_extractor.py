# 📄 File: plantscope/modules/plant_lookup/domain/services/structured_extractor.py
# 🧭 Purpose (Layman Explanation):
# AI models answer in chatty text; this pulls out the one block of structured data hidden inside the answer
# 🧪 Purpose (Technical Summary):
# Text-to-Structured Extractor: bracket-balance scan (string and escape aware) for the first top-level
# JSON object, then json.loads. Typed failure when no span exists or the span does not parse.
# 🔗 Dependencies:
# json, plantscope.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# fallback orchestrator (descriptors flagged structured)

import json
from typing import Any, Dict, Optional, Tuple

from plantscope.shared.core.exceptions import (
    MalformedStructuredBlockError,
    NoStructuredBlockFoundError,
)


def find_object_span(text: str) -> Optional[Tuple[int, int]]:
    """
    Locate the first '{' and its matching closing '}'.

    Braces inside JSON string literals are ignored. Returns (start, end)
    with end exclusive, or None when no balanced span exists.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return start, index + 1

    # unbalanced: a later '{' is nested inside this one and cannot close either
    return None


def extract_structured_block(text: Any) -> Dict[str, Any]:
    """
    Return the first well-formed JSON object embedded in text.

    Raises:
        NoStructuredBlockFoundError: no balanced {...} span
        MalformedStructuredBlockError: span found but not valid JSON
    """
    if not isinstance(text, str):
        if isinstance(text, dict):
            return text
        raise NoStructuredBlockFoundError(excerpt=repr(text))

    span = find_object_span(text)
    if span is None:
        raise NoStructuredBlockFoundError(excerpt=text)

    block = text[span[0]:span[1]]
    try:
        parsed = json.loads(block)
    except ValueError as e:
        raise MalformedStructuredBlockError(excerpt=block, reason=str(e)) from e

    if not isinstance(parsed, dict):
        raise MalformedStructuredBlockError(excerpt=block, reason="not an object")
    return parsed
