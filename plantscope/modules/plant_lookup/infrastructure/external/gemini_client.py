# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/gemini_client.py
# 🧭 Purpose (Layman Explanation):
# Asks Google's Gemini AI for plant or disease facts and returns its written answer
# 🧪 Purpose (Technical Summary):
# Gemini generateContent client returning candidates[0].content.parts[0].text as raw text; the JSON
# inside is pulled out later by the structured extractor
# 🔗 Dependencies:
# APIClient, shared exceptions
# 🔄 Connected Modules / Calls From:
# plant and disease fallback plans

from typing import Any, Dict

from plantscope.shared.core.exceptions import ProviderTransportError
from plantscope.shared.infrastructure.external_apis import APIClient

from .base import ProviderClient

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 8192,
}


class GeminiClient(ProviderClient):
    """Primary generative-text provider."""

    name = "gemini"

    def __init__(self, api_client: APIClient, model: str = "gemini-1.5-flash"):
        super().__init__(api_client)
        self.model = model

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "GeminiClient":
        return cls(
            APIClient(
                base_url=config["api_url"],
                api_name=cls.name,
                api_key=config.get("api_key"),
                timeout=timeout,
                requires_key=True
            ),
            model=config.get("model") or "gemini-1.5-flash"
        )

    async def generate(self, prompt: str) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": GENERATION_CONFIG,
        }
        response = await self.api_client.post(
            f"models/{self.model}:generateContent",
            data=payload,
            params={"key": self.api_client.api_key}
        )

        try:
            text = response["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None

        if not isinstance(text, str) or not text.strip():
            raise ProviderTransportError(
                message="Invalid response format from Gemini API",
                provider=self.name
            )
        return text
