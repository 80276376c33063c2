"""Identify food in a photo and suggest air fryer settings via the vision LLM."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .llm import VisionLLMResult

logger = logging.getLogger(__name__)

COOKING_INSTRUCTIONS_SCHEMA_NAME = "cooking_instructions"


class CookingInstructions(BaseModel):
    """Structured answer returned by the model for a single food photo.

    Values are kept as the model phrased them; they are never parsed into
    numbers.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    food_name: str = Field(
        alias="foodName",
        description="The identified name of the food item.",
    )
    cooking_time: str = Field(
        alias="cookingTime",
        description="The cooking time in minutes.",
    )
    cooking_temperature_celsius: str = Field(
        alias="cookingTemperatureCelsius",
        description="The cooking temperature in Celsius.",
    )

    def to_payload(self) -> dict[str, str]:
        """Return the camelCase shape the frontend and API clients expect."""

        return self.model_dump(by_alias=True)


class InferenceFailure(RuntimeError):
    """Raised when the model call fails or its answer cannot be used."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ImageAnalyzer(Protocol):
    def analyze_image(
        self,
        *,
        image_url: str,
        prompt: str | None = None,
        response_schema: dict[str, Any] | None = None,
        schema_name: str = ...,
    ) -> VisionLLMResult: ...


def cooking_instructions_schema() -> dict[str, Any]:
    """JSON schema handed to the model for structured output."""

    return CookingInstructions.model_json_schema(by_alias=True)


def identify_food(
    photo_url: str,
    *,
    client: ImageAnalyzer,
    prompt: str | None = None,
) -> CookingInstructions:
    """Ask the vision model what the food is and how to air fry it.

    Exactly one request is made per call. Any upstream error, non-JSON output
    or output that does not match :class:`CookingInstructions` is raised as
    :class:`InferenceFailure`.
    """

    try:
        result = client.analyze_image(
            image_url=photo_url,
            prompt=prompt,
            response_schema=cooking_instructions_schema(),
            schema_name=COOKING_INSTRUCTIONS_SCHEMA_NAME,
        )
    except Exception as exc:
        raise InferenceFailure(str(exc) or exc.__class__.__name__) from exc

    if not isinstance(result.parsed_json, dict):
        logger.warning(
            "vision model returned non-JSON output: %r", result.raw_text[:512]
        )
        raise InferenceFailure("model response was not valid JSON")

    try:
        instructions = CookingInstructions.model_validate(result.parsed_json)
    except ValidationError as exc:
        logger.warning(
            "vision model output failed schema validation: %s", exc
        )
        raise InferenceFailure(
            "model response did not match the cooking instructions schema"
        ) from exc

    logger.info("identified food %r", instructions.food_name)
    return instructions
