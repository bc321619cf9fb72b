# 📄 File: plantscope/modules/plant_lookup/domain/models/plan.py
# 🧭 Purpose (Layman Explanation):
# Describes the "plan B, plan C" list for each kind of fact (which source to ask first, which next,
# and when the answer is good enough), plus the report of what each source actually delivered
# 🧪 Purpose (Technical Summary):
# Declarative Fallback Plan model: provider-call descriptors with mapping tables and sufficiency
# predicates, and the aggregation manifest returned alongside every Canonical Record
# 🔗 Dependencies:
# pydantic, enum, typing
# 🔄 Connected Modules / Calls From:
# fallback orchestrator, plan builders, query handlers, response schemas

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .record import CanonicalRecord, get_path, is_empty
from .subject import SubjectQuery

# canonical dotted path -> raw dotted path, or (raw dotted path, coercion)
MappingRule = Union[str, Tuple[str, str]]
FieldMapping = Dict[str, MappingRule]

# fetch(query, record): record is the Canonical Record accumulated so far, read-only
Fetcher = Callable[[SubjectQuery, CanonicalRecord], Awaitable[Any]]
SufficiencyPredicate = Callable[[Dict[str, Any]], bool]


def requires_fields(*paths: str) -> SufficiencyPredicate:
    """Build a predicate that passes when every dotted path holds a value."""
    def predicate(fragment: Dict[str, Any]) -> bool:
        return all(not is_empty(get_path(fragment, path)) for path in paths)

    predicate.__name__ = f"requires({', '.join(paths)})"
    return predicate


def any_data(fragment: Dict[str, Any]) -> bool:
    return not is_empty(fragment)


class ProviderCall(BaseModel):
    """
    One provider-call descriptor inside a Fallback Plan.

    key identifies the call for per-aggregation memoisation: two
    descriptors with the same key are invoked at most once.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    key: str
    provider: str
    fetch: Fetcher
    mapping: FieldMapping = Field(default_factory=dict)
    structured: bool = False
    sufficient: SufficiencyPredicate = any_data
    timeout: Optional[float] = None


class FallbackPlan(BaseModel):
    """Ordered descriptors for one logical field group."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    group: str
    fields: List[str]
    calls: List[ProviderCall]
    mandatory: bool = False


class AttemptStatus(str, Enum):
    SUCCESS = "success"            # sufficient, group satisfied
    INSUFFICIENT = "insufficient"  # merged as partial credit, chain continues
    FAILED = "failed"              # provider or extraction failure
    SKIPPED = "skipped"            # group already satisfied
    REUSED = "reused"              # outcome of an earlier identical descriptor


class ProviderAttempt(BaseModel):
    group: str
    provider: str
    status: AttemptStatus
    fields: List[str] = Field(default_factory=list)
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    duration_ms: float = 0.0


class AggregationManifest(BaseModel):
    """Diagnostics: which providers contributed which fields, which failed."""

    attempts: List[ProviderAttempt] = Field(default_factory=list)
    satisfied_groups: List[str] = Field(default_factory=list)
    missing_groups: List[str] = Field(default_factory=list)
    degraded_groups: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def extend(self, other: "AggregationManifest"):
        self.attempts.extend(other.attempts)
        self.satisfied_groups.extend(other.satisfied_groups)
        self.missing_groups.extend(other.missing_groups)
        self.degraded_groups.extend(other.degraded_groups)
        self.warnings.extend(other.warnings)


class AggregationResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    record: CanonicalRecord
    manifest: AggregationManifest = Field(default_factory=AggregationManifest)
