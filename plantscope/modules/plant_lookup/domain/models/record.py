# 📄 File: plantscope/modules/plant_lookup/domain/models/record.py
# 🧭 Purpose (Layman Explanation):
# The single combined fact sheet about a plant or disease, filled in piece by piece from several sources
# 🧪 Purpose (Technical Summary):
# Canonical Record with recursive first-writer-wins merge at the leaves and dotted-path access
# 🔗 Dependencies:
# copy, typing
# 🔄 Connected Modules / Calls From:
# fallback orchestrator, query handlers, response schemas

"""
Canonical Record

A record is a tree of plain dicts. Absent fields are simply missing keys;
values that are None, empty strings, empty lists or empty dicts count as
absent and may be filled later. Once a leaf holds a value it is never
overwritten by a later merge.
"""

import copy
from typing import Any, Dict, Iterator, List, Optional


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def get_path(data: Any, path: str) -> Any:
    """Resolve a dotted path through dicts (and list indexes). Missing -> None."""
    current = data
    for segment in path.split("."):
        if isinstance(current, dict):
            current = current.get(segment)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def set_path(data: Dict[str, Any], path: str, value: Any):
    """Write value at a dotted path, creating intermediate dicts."""
    segments = path.split(".")
    current = data
    for segment in segments[:-1]:
        nxt = current.get(segment)
        if not isinstance(nxt, dict):
            nxt = {}
            current[segment] = nxt
        current = nxt
    current[segments[-1]] = value


def prune(value: Any) -> Any:
    """Deep copy without empty leaves. Returns None when nothing is left."""
    if isinstance(value, dict):
        pruned = {}
        for key, item in value.items():
            item = prune(item)
            if not is_empty(item):
                pruned[key] = item
        return pruned or None
    if isinstance(value, list):
        items = [prune(item) for item in value]
        items = [item for item in items if not is_empty(item)]
        return items or None
    if is_empty(value):
        return None
    return copy.deepcopy(value)


class CanonicalRecord:
    """
    Accumulating, normalized representation of a plant or disease.

    merge() applies first-writer-wins independently for every leaf and
    reports which dotted paths the fragment actually contributed.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = {}
        if data:
            self.merge(data)

    def merge(self, fragment: Optional[Dict[str, Any]]) -> List[str]:
        if not isinstance(fragment, dict):
            return []
        contributed: List[str] = []
        self._merge_into(self._data, fragment, "", contributed)
        return contributed

    def _merge_into(self, target: Dict[str, Any], fragment: Dict[str, Any], prefix: str, contributed: List[str]):
        for key, incoming in fragment.items():
            if is_empty(incoming):
                continue
            path = f"{prefix}{key}"
            current = target.get(key)

            if isinstance(incoming, dict) and (is_empty(current) or isinstance(current, dict)):
                if not isinstance(current, dict):
                    current = {}
                    target[key] = current
                self._merge_into(current, incoming, f"{path}.", contributed)
                if not current:
                    del target[key]
            elif is_empty(current):
                target[key] = copy.deepcopy(incoming)
                contributed.append(path)

    def get(self, path: str, default: Any = None) -> Any:
        value = get_path(self._data, path)
        return default if is_empty(value) else value

    def has(self, path: str) -> bool:
        return not is_empty(get_path(self._data, path))

    def set_if_absent(self, path: str, value: Any) -> bool:
        """Write a derived value only when the path is still empty."""
        if is_empty(value) or self.has(path):
            return False
        set_path(self._data, path, copy.deepcopy(value))
        return True

    def is_empty(self) -> bool:
        return prune(self._data) is None

    def to_dict(self) -> Dict[str, Any]:
        return prune(self._data) or {}

    def keys(self) -> Iterator[str]:
        return iter(self.to_dict().keys())

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __repr__(self) -> str:
        return f"CanonicalRecord({sorted(self.to_dict().keys())})"
