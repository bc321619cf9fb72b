# 📄 File: plantscope/modules/plant_lookup/domain/services/image_aggregator.py
# 🧭 Purpose (Layman Explanation):
# Finds a handful of good pictures of a plant or disease: first from the free scientific image
# library, then, only if that was not enough, from a stock-photo site with strict relevance checks
# 🧪 Purpose (Technical Summary):
# Image Candidate Aggregator: name cleaning, primary media search with query variants and early exit,
# sufficiency short-circuit, secondary search with allow/deny keyword filter and name-match override,
# merge into a capped, deduplicated Candidate Set. Never raises for provider failures.
# 🔗 Dependencies:
# re, typing, domain models, name cleaning, shared logging
# 🔄 Connected Modules / Calls From:
# application query handlers (run concurrently with record aggregation)

import re
from typing import Dict, List, Optional, Protocol

from plantscope.shared.utils.logging import get_logger

from ..models.images import CandidateSet, ImageCandidate
from ..models.subject import SubjectKind
from .name_cleaning import clean_disease_name, clean_scientific_name, to_search_term

logger = get_logger(__name__)


class MediaSearchProvider(Protocol):
    name: str

    @property
    def is_configured(self) -> bool: ...

    async def search_images(self, query: str, limit: int) -> List[ImageCandidate]: ...


class ImageAggregator:
    """
    Collects up to target_count images for a subject name.

    Tunables mirror the IMAGE_* settings; relevance_terms maps a subject
    kind to {"allow": [...], "deny": [...]}.
    """

    QUERY_VARIANTS = 2
    PER_QUERY_LIMIT = 3

    def __init__(
        self,
        primary: Optional[MediaSearchProvider],
        secondary: Optional[MediaSearchProvider] = None,
        relevance_terms: Optional[Dict[SubjectKind, Dict[str, List[str]]]] = None,
        target_count: int = 4,
        primary_cap: int = 4,
        sufficient_count: int = 3,
        secondary_cap: int = 2
    ):
        self.primary = primary
        self.secondary = secondary
        self.relevance_terms = relevance_terms or {}
        self.target_count = target_count
        self.primary_cap = primary_cap
        self.sufficient_count = sufficient_count
        self.secondary_cap = secondary_cap

    @staticmethod
    def clean_name(name: str, kind: SubjectKind) -> str:
        if kind == SubjectKind.DISEASE:
            return clean_disease_name(name)
        return clean_scientific_name(name)

    @staticmethod
    def primary_queries(clean_name: str, kind: SubjectKind) -> List[str]:
        term = to_search_term(clean_name)
        if kind == SubjectKind.DISEASE:
            return [f"{term} plant disease", f"{term} pathology", f"{term} plant pathogen", f"{term} symptoms"]
        return [f"{term} botanical", f"{term} plant", f"{term} flower", f"{term} leaves"]

    @staticmethod
    def secondary_queries(clean_name: str, kind: SubjectKind) -> List[str]:
        if kind == SubjectKind.DISEASE:
            return [f'"{clean_name}" plant pathology', f"{clean_name} leaf disease", f"plant disease {clean_name}"]
        return [f'"{clean_name}" plant', f"{clean_name} botanical", f"{clean_name} flower"]

    async def aggregate(self, name: str, kind: SubjectKind = SubjectKind.PLANT) -> CandidateSet:
        candidates = CandidateSet(cap=self.target_count)
        clean_name = self.clean_name(name, kind)
        if not clean_name:
            return candidates

        primary_found = await self._collect_primary(clean_name, kind)
        logger.info(
            f"Found {len(primary_found)} primary images for {clean_name}",
            extra={"subject": clean_name, "provider": getattr(self.primary, "name", None)}
        )

        if len(primary_found) >= self.sufficient_count:
            candidates.extend(primary_found)
            return candidates

        secondary_found = await self._collect_secondary(clean_name, kind)
        candidates.extend(primary_found)
        candidates.extend(secondary_found)
        return candidates

    async def _collect_primary(self, clean_name: str, kind: SubjectKind) -> List[ImageCandidate]:
        found: List[ImageCandidate] = []
        if self.primary is None:
            return found

        for query in self.primary_queries(clean_name, kind)[:self.QUERY_VARIANTS]:
            results = await self._safe_search(self.primary, query)
            found.extend(results)
            if len(found) >= self.primary_cap:
                break

        return _dedupe(found)[:self.primary_cap]

    async def _collect_secondary(self, clean_name: str, kind: SubjectKind) -> List[ImageCandidate]:
        found: List[ImageCandidate] = []
        if self.secondary is None or not self.secondary.is_configured:
            return found

        for query in self.secondary_queries(clean_name, kind)[:self.QUERY_VARIANTS]:
            results = await self._safe_search(self.secondary, query)
            relevant = [c for c in results if self.is_relevant(c, clean_name, kind)]
            rejected = len(results) - len(relevant)
            if rejected:
                logger.debug(
                    f"Relevance filter rejected {rejected} images for {clean_name}",
                    extra={"query": query}
                )
            found.extend(relevant)
            if len(found) >= self.secondary_cap:
                break

        return found[:self.secondary_cap]

    def is_relevant(self, candidate: ImageCandidate, clean_name: str, kind: SubjectKind) -> bool:
        """(allow-term AND no deny-term) OR the blob names the subject directly."""
        blob = f"{candidate.keywords} {candidate.caption or ''}".lower()
        if clean_name and clean_name.lower() in blob:
            return True

        terms = self.relevance_terms.get(kind, {})
        has_allowed = any(_mentions(blob, term) for term in terms.get("allow", []))
        has_denied = any(_mentions(blob, term) for term in terms.get("deny", []))
        return has_allowed and not has_denied

    async def _safe_search(self, provider: MediaSearchProvider, query: str) -> List[ImageCandidate]:
        # any failure counts as zero candidates from this query
        try:
            return list(await provider.search_images(query, self.PER_QUERY_LIMIT) or [])
        except Exception as e:
            logger.warning(
                f"Image search failed on {provider.name} for '{query}': {e}",
                extra={"provider": provider.name, "error_type": type(e).__name__}
            )
            return []


def _mentions(blob: str, term: str) -> bool:
    # whole words only, plural allowed: "petal" matches "petals", "pet" does not
    pattern = rf"\b{re.escape(term.lower())}(?:e?s)?\b"
    return re.search(pattern, blob) is not None


def _dedupe(candidates: List[ImageCandidate]) -> List[ImageCandidate]:
    unique: List[ImageCandidate] = []
    for candidate in candidates:
        if not any(candidate.is_duplicate_of(existing) for existing in unique):
            unique.append(candidate)
    return unique
