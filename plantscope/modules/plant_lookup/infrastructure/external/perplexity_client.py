# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/perplexity_client.py
# 🧭 Purpose (Layman Explanation):
# Backup AI source: asks Perplexity for plant or disease facts when Gemini could not help
# 🧪 Purpose (Technical Summary):
# Perplexity chat-completions client with bearer auth and a pre-flight "pplx-" key format check;
# returns choices[0].message.content as raw text
# 🔗 Dependencies:
# APIClient, shared exceptions
# 🔄 Connected Modules / Calls From:
# plant and disease fallback plans

from typing import Any, Dict

from plantscope.shared.core.exceptions import ProviderAuthError, ProviderTransportError
from plantscope.shared.infrastructure.external_apis import APIClient

from .base import ProviderClient
from .prompts import PLANT_SYSTEM_PROMPT

KEY_PREFIX = "pplx-"


class PerplexityClient(ProviderClient):
    """Secondary generative-text provider."""

    name = "perplexity"

    def __init__(self, api_client: APIClient, model: str = "sonar"):
        super().__init__(api_client)
        self.model = model

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "PerplexityClient":
        api_key = config.get("api_key")
        return cls(
            APIClient(
                base_url=config["api_url"],
                api_name=cls.name,
                api_key=api_key,
                timeout=timeout,
                requires_key=True,
                default_headers={"Authorization": f"Bearer {api_key}"} if api_key else None
            ),
            model=config.get("model") or "sonar"
        )

    def _check_key_format(self):
        api_key = self.api_client.api_key
        if api_key and not api_key.startswith(KEY_PREFIX):
            raise ProviderAuthError(
                provider=self.name,
                message=f'Perplexity API key must start with "{KEY_PREFIX}"'
            )

    async def complete(self, prompt: str, system_prompt: str = PLANT_SYSTEM_PROMPT) -> str:
        self.api_client.ensure_configured()
        self._check_key_format()

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.7,
        }
        response = await self.api_client.post("chat/completions", data=payload)

        try:
            content = response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not isinstance(content, str) or not content.strip():
            raise ProviderTransportError(
                message="Invalid response format from Perplexity API",
                provider=self.name
            )
        return content
