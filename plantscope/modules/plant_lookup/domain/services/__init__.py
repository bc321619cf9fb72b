# 📄 File: plantscope/modules/plant_lookup/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the logic that combines answers from many data sources into one trustworthy result
# 🧪 Purpose (Technical Summary):
# Domain services: extractor, normalizer, fallback orchestrator, image aggregator, name cleaning
# 🔄 Connected Modules / Calls From:
# Application handlers, presentation dependencies

from .structured_extractor import extract_structured_block, find_object_span
from .record_normalizer import normalize, restrict_to_fields, unwrap
from .name_cleaning import clean_disease_name, clean_scientific_name, to_search_term
from .fallback_orchestrator import FallbackOrchestrator
from .image_aggregator import ImageAggregator

__all__ = [
    "extract_structured_block",
    "find_object_span",
    "normalize",
    "restrict_to_fields",
    "unwrap",
    "clean_disease_name",
    "clean_scientific_name",
    "to_search_term",
    "FallbackOrchestrator",
    "ImageAggregator",
]
