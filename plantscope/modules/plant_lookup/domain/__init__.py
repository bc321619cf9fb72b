# 📄 File: plantscope/modules/plant_lookup/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core rules for combining plant and disease facts from several data sources
# 🧪 Purpose (Technical Summary):
# Domain layer initialization: models (subject, record, images, plans) and services (aggregation core)
# 🔄 Connected Modules / Calls From:
# Application layer, Infrastructure layer, Presentation layer

"""
Plant Lookup Domain Layer

Domain Models:
- SubjectQuery: what is being looked up (name or image)
- CanonicalRecord: merged, normalized plant or disease record
- ImageCandidate / CandidateSet: bounded, deduplicated image results
- FallbackPlan / ProviderCall: declarative provider fallback chains

Domain Services:
- FallbackOrchestrator: runs plans, first-writer-wins merge, manifest
- ImageAggregator: two-tier image search with relevance filtering
- Structured extractor, record normalizer, name cleaning
"""
