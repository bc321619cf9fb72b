# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/base.py
# 🧭 Purpose (Layman Explanation):
# The common shape every data-source connector follows, so the rest of the app can treat them alike
# 🧪 Purpose (Technical Summary):
# ProviderClient base wrapping one shared APIClient; exposes configuration status, stats and close()
# 🔗 Dependencies:
# plantscope.shared.infrastructure.external_apis.APIClient
# 🔄 Connected Modules / Calls From:
# every provider client in this package, provider registry

from typing import Any, Dict

from plantscope.shared.infrastructure.external_apis import APIClient


class ProviderClient:
    """
    Base class for provider clients.

    Subclasses expose async methods that take typed input and return the
    provider's raw JSON (or raw text for generative models), raising only
    typed provider failures.
    """

    name: str = "provider"

    def __init__(self, api_client: APIClient):
        self.api_client = api_client

    @property
    def is_configured(self) -> bool:
        return self.api_client.is_configured

    def get_stats(self) -> Dict[str, Any]:
        return self.api_client.get_stats()

    async def close(self):
        await self.api_client.close()
