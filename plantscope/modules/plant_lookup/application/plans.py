# 📄 File: plantscope/modules/plant_lookup/application/plans.py
# 🧭 Purpose (Layman Explanation):
# Writes down, for each kind of fact, which sources to ask and in what order, and what counts as a good answer
# 🧪 Purpose (Technical Summary):
# Fallback Plan builders for plant lookup, plant identification (Plant.id seeded), disease lookup and
# weather. Descriptors sharing a key are invoked once per aggregation by the orchestrator.
# 🔗 Dependencies:
# domain models, field mappings, provider registry, prompts
# 🔄 Connected Modules / Calls From:
# application query handlers

from typing import Any, Dict, List, Optional

from ..domain.models.plan import FallbackPlan, ProviderCall, SufficiencyPredicate, requires_fields
from ..domain.models.record import CanonicalRecord
from ..domain.models.subject import SubjectQuery
from ..infrastructure.external.prompts import DISEASE_SYSTEM_PROMPT, disease_prompt, plant_prompt
from ..infrastructure.external.registry import ProviderRegistry
from .field_mappings import (
    DISEASE_MANAGEMENT_FIELDS,
    DISEASE_OVERVIEW_FIELDS,
    GBIF_MATCH_MAPPING,
    GBIF_SPECIES_MAPPING,
    GENERATIVE_DISEASE_MAPPING,
    GENERATIVE_PLANT_MAPPING,
    OPENWEATHER_MAPPING,
    PLANT_ID_MAPPING,
    PLANT_PROFILE_FIELDS,
    PLANT_RANGE_FIELDS,
    PLANT_TAXONOMY_FIELDS,
    TAXONOMY_RANKS,
    WEATHER_FIELDS,
)

# Sufficiency predicates per field group
TAXONOMY_SUFFICIENT = requires_fields(*(f"taxonomy.{rank}" for rank in TAXONOMY_RANKS))
PROFILE_SUFFICIENT = requires_fields("morphology", "cultivation", "maintenance")
RANGE_SUFFICIENT = requires_fields("nativeRange")
DISEASE_OVERVIEW_SUFFICIENT = requires_fields("overview", "symptoms")
DISEASE_MANAGEMENT_SUFFICIENT = requires_fields("treatment", "prevention")
WEATHER_SUFFICIENT = requires_fields("weather.temperature")


class PlanBuilder:
    """Builds Fallback Plans bound to the provider registry."""

    def __init__(self, providers: ProviderRegistry):
        self.providers = providers

    # =========================================================================
    # DESCRIPTORS
    # =========================================================================

    def gemini_plant(self, sufficient: SufficiencyPredicate) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> str:
            return await self.providers.gemini.generate(plant_prompt(query.name))

        return ProviderCall(
            key="gemini:plant", provider="gemini", fetch=fetch,
            mapping=GENERATIVE_PLANT_MAPPING, structured=True, sufficient=sufficient
        )

    def perplexity_plant(self, sufficient: SufficiencyPredicate) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> str:
            return await self.providers.perplexity.complete(plant_prompt(query.name))

        return ProviderCall(
            key="perplexity:plant", provider="perplexity", fetch=fetch,
            mapping=GENERATIVE_PLANT_MAPPING, structured=True, sufficient=sufficient
        )

    def gbif_match(self, sufficient: SufficiencyPredicate) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> Dict[str, Any]:
            return await self.providers.gbif.match(query.name)

        return ProviderCall(
            key="gbif:match", provider="gbif", fetch=fetch,
            mapping=GBIF_MATCH_MAPPING, sufficient=sufficient
        )

    def gbif_species(self, sufficient: SufficiencyPredicate) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> Dict[str, Any]:
            # gbifId comes from the gbif:match descriptor (or a Plant.id seed) earlier in this run
            key = query.gbif_id or record.get("gbifId")
            if not key:
                return {}
            return await self.providers.gbif.species(key)

        return ProviderCall(
            key="gbif:species", provider="gbif", fetch=fetch,
            mapping=GBIF_SPECIES_MAPPING, sufficient=sufficient
        )

    def gemini_disease(self, sufficient: SufficiencyPredicate) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> str:
            return await self.providers.gemini.generate(disease_prompt(query.name))

        return ProviderCall(
            key="gemini:disease", provider="gemini", fetch=fetch,
            mapping=GENERATIVE_DISEASE_MAPPING, structured=True, sufficient=sufficient
        )

    def perplexity_disease(self, sufficient: SufficiencyPredicate) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> str:
            return await self.providers.perplexity.complete(
                disease_prompt(query.name), system_prompt=DISEASE_SYSTEM_PROMPT
            )

        return ProviderCall(
            key="perplexity:disease", provider="perplexity", fetch=fetch,
            mapping=GENERATIVE_DISEASE_MAPPING, structured=True, sufficient=sufficient
        )

    def openweather(self) -> ProviderCall:
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> Dict[str, Any]:
            return await self.providers.openweather.current(query.latitude, query.longitude)

        return ProviderCall(
            key="openweather:current", provider="openweather", fetch=fetch,
            mapping=OPENWEATHER_MAPPING, sufficient=WEATHER_SUFFICIENT
        )

    @staticmethod
    def identification_seed(suggestion: Dict[str, Any], sufficient: SufficiencyPredicate) -> ProviderCall:
        """Descriptor replaying an already-fetched Plant.id suggestion."""
        async def fetch(query: SubjectQuery, record: CanonicalRecord) -> Dict[str, Any]:
            return suggestion

        return ProviderCall(
            key="plant_id:identify", provider="plant_id", fetch=fetch,
            mapping=PLANT_ID_MAPPING, sufficient=sufficient
        )

    # =========================================================================
    # PLANS
    # =========================================================================

    def plant_plans(self, seed_suggestion: Optional[Dict[str, Any]] = None) -> List[FallbackPlan]:
        """
        Plant record plans: taxonomy, profile, nativeRange.

        With seed_suggestion (image identification), Plant.id data is the
        first descriptor of every group so it wins ties.
        """
        def seeded(sufficient: SufficiencyPredicate, calls: List[ProviderCall]) -> List[ProviderCall]:
            if seed_suggestion is None:
                return calls
            return [self.identification_seed(seed_suggestion, sufficient)] + calls

        return [
            FallbackPlan(
                group="taxonomy",
                fields=PLANT_TAXONOMY_FIELDS,
                mandatory=True,
                calls=seeded(TAXONOMY_SUFFICIENT, [
                    self.gbif_match(TAXONOMY_SUFFICIENT),
                    self.gemini_plant(TAXONOMY_SUFFICIENT),
                    self.perplexity_plant(TAXONOMY_SUFFICIENT),
                ]),
            ),
            FallbackPlan(
                group="profile",
                fields=PLANT_PROFILE_FIELDS,
                mandatory=True,
                calls=seeded(PROFILE_SUFFICIENT, [
                    self.gemini_plant(PROFILE_SUFFICIENT),
                    self.perplexity_plant(PROFILE_SUFFICIENT),
                ]),
            ),
            FallbackPlan(
                group="nativeRange",
                fields=PLANT_RANGE_FIELDS,
                mandatory=False,
                calls=seeded(RANGE_SUFFICIENT, [
                    self.gemini_plant(RANGE_SUFFICIENT),
                    self.gbif_species(RANGE_SUFFICIENT),
                    self.perplexity_plant(RANGE_SUFFICIENT),
                ]),
            ),
        ]

    def disease_plans(self) -> List[FallbackPlan]:
        return [
            FallbackPlan(
                group="overview",
                fields=DISEASE_OVERVIEW_FIELDS,
                mandatory=True,
                calls=[
                    self.gemini_disease(DISEASE_OVERVIEW_SUFFICIENT),
                    self.perplexity_disease(DISEASE_OVERVIEW_SUFFICIENT),
                ],
            ),
            FallbackPlan(
                group="management",
                fields=DISEASE_MANAGEMENT_FIELDS,
                mandatory=False,
                calls=[
                    self.gemini_disease(DISEASE_MANAGEMENT_SUFFICIENT),
                    self.perplexity_disease(DISEASE_MANAGEMENT_SUFFICIENT),
                ],
            ),
        ]

    def weather_plans(self) -> List[FallbackPlan]:
        return [
            FallbackPlan(
                group="weather",
                fields=WEATHER_FIELDS,
                mandatory=False,
                calls=[self.openweather()],
            )
        ]
