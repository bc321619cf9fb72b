# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/gbif_client.py
# 🧭 Purpose (Layman Explanation):
# Talks to GBIF, the global biodiversity database, for official plant classification, name
# suggestions while typing, and where a plant has been observed around the world
# 🧪 Purpose (Technical Summary):
# GBIF species match / species detail / suggest / occurrence search client (no key required)
# 🔗 Dependencies:
# APIClient
# 🔄 Connected Modules / Calls From:
# plant fallback plans (taxonomy, nativeRange), suggest and distribution query handlers

from typing import Any, Dict, List, Union

from plantscope.shared.infrastructure.external_apis import APIClient

from .base import ProviderClient

SUGGEST_LIMIT = 10
OCCURRENCE_LIMIT = 300


class GbifClient(ProviderClient):
    """Taxonomy search provider."""

    name = "gbif"

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "GbifClient":
        return cls(APIClient(
            base_url=config["api_url"],
            api_name=cls.name,
            timeout=timeout,
            requires_key=False
        ))

    async def match(self, name: str) -> Dict[str, Any]:
        """Best backbone match for a name; empty dict when GBIF has no match."""
        response = await self.api_client.get("species/match", params={"name": name})
        if not isinstance(response, dict) or response.get("matchType") == "NONE":
            return {}
        return response

    async def species(self, key: Union[int, str]) -> Dict[str, Any]:
        response = await self.api_client.get(f"species/{key}")
        return response if isinstance(response, dict) else {}

    async def suggest(self, query: str, limit: int = SUGGEST_LIMIT) -> List[Dict[str, Any]]:
        response = await self.api_client.get(
            "species/suggest",
            params={"q": query, "rank": "SPECIES", "status": "ACCEPTED", "limit": limit}
        )
        return response if isinstance(response, list) else []

    async def occurrences(self, taxon_key: Union[int, str], limit: int = OCCURRENCE_LIMIT) -> List[Dict[str, Any]]:
        response = await self.api_client.get(
            "occurrence/search",
            params={"taxonKey": taxon_key, "limit": limit, "hasCoordinate": "true"}
        )
        if not isinstance(response, dict):
            return []
        results = response.get("results")
        return results if isinstance(results, list) else []
