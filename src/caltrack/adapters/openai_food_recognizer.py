"""Food photo recognition through the OpenAI Responses API."""

import json
import logging
from dataclasses import dataclass

from openai import AsyncOpenAI
from pydantic import ValidationError

from caltrack.domain.recognition import DetectedFood
from caltrack.errors import RecognitionFailed
from caltrack.services.recognition import (
    RECOGNITION_PROMPT,
    RECOGNITION_SCHEMA,
    FoodRecognitionProvider,
    image_data_url,
)

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIFoodRecognitionProvider(FoodRecognitionProvider):
    """Asks a vision model for the dish in a photo and validates the answer."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIFoodRecognitionProvider":
        """Create a provider with its own OpenAI client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def recognize(self, image: bytes) -> DetectedFood:
        response = await self.client.responses.create(**self._request(image))
        if not response.output_text:
            raise RecognitionFailed("Recognition returned an empty answer")
        try:
            return DetectedFood.model_validate(json.loads(response.output_text))
        except (json.JSONDecodeError, ValidationError) as exc:
            _logger.warning("Rejected recognition answer: %s", exc)
            raise RecognitionFailed("Recognition returned a bad candidate") from exc

    def _request(self, image: bytes) -> dict[str, object]:
        payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": RECOGNITION_PROMPT},
                        {"type": "input_image", "image_url": image_data_url(image)},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "detected_food",
                    "strict": True,
                    "schema": RECOGNITION_SCHEMA,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            payload["reasoning"] = {"effort": self.reasoning_effort}
        return payload
