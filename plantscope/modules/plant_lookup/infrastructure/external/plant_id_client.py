# 📄 File: plantscope/modules/plant_lookup/infrastructure/external/plant_id_client.py
# 🧭 Purpose (Layman Explanation):
# Sends a plant photo to the Plant.id service and gets back its best guesses of what the plant is
# 🧪 Purpose (Technical Summary):
# Plant.id v2 identify client: base64 image upload with a plant_details list; returns raw suggestions
# whose detail values are envelope-shaped and normalized downstream
# 🔗 Dependencies:
# base64, APIClient, shared exceptions
# 🔄 Connected Modules / Calls From:
# plant identification query handler

import base64
from typing import Any, Dict, List, Optional

from plantscope.shared.core.exceptions import ProviderTransportError
from plantscope.shared.infrastructure.external_apis import APIClient
from plantscope.shared.utils.logging import get_logger

from .base import ProviderClient

logger = get_logger(__name__)

PLANT_DETAILS = [
    "common_names",
    "url",
    "description",
    "taxonomy",
    "rank",
    "gbif_id",
    "wiki_description",
    "wiki_image",
    "synonyms",
    "edible_parts",
    "propagation_methods",
    "watering",
]


class PlantIdClient(ProviderClient):
    """Image-identification provider."""

    name = "plant_id"

    @classmethod
    def from_config(cls, config: Dict[str, Any], timeout: float) -> "PlantIdClient":
        api_key = config.get("api_key")
        return cls(APIClient(
            base_url=config["api_url"],
            api_name=cls.name,
            api_key=api_key,
            timeout=timeout,
            requires_key=True,
            default_headers={"Api-Key": api_key} if api_key else None
        ))

    async def identify(
        self,
        image: bytes,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        details: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "images": [base64.b64encode(image).decode("ascii")],
            "modifiers": ["crops_fast", "similar_images"],
            "plant_language": "en",
            "plant_details": details or PLANT_DETAILS,
        }
        if latitude is not None and longitude is not None:
            payload["latitude"] = latitude
            payload["longitude"] = longitude

        response = await self.api_client.post("", data=payload)

        if not isinstance(response, dict) or not isinstance(response.get("suggestions"), list):
            raise ProviderTransportError(
                message="Invalid response from plant identification service",
                provider=self.name
            )

        logger.info(
            f"Plant.id returned {len(response['suggestions'])} suggestions",
            extra={"provider": self.name}
        )
        return response
