# 📄 File: plantscope/modules/plant_lookup/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core data shapes of a lookup: the question, the combined answer, the pictures and the fallback plans
# 🧪 Purpose (Technical Summary):
# Package initialization for plant lookup domain models
# 🔄 Connected Modules / Calls From:
# Domain services, application layer, presentation schemas

from .subject import SubjectKind, SubjectQuery
from .record import CanonicalRecord, get_path, is_empty, prune, set_path
from .images import CandidateSet, ImageCandidate
from .plan import (
    AggregationManifest,
    AggregationResult,
    AttemptStatus,
    FallbackPlan,
    FieldMapping,
    ProviderAttempt,
    ProviderCall,
    any_data,
    requires_fields,
)

__all__ = [
    "SubjectKind",
    "SubjectQuery",
    "CanonicalRecord",
    "get_path",
    "is_empty",
    "prune",
    "set_path",
    "CandidateSet",
    "ImageCandidate",
    "AggregationManifest",
    "AggregationResult",
    "AttemptStatus",
    "FallbackPlan",
    "FieldMapping",
    "ProviderAttempt",
    "ProviderCall",
    "any_data",
    "requires_fields",
]
