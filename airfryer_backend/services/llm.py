"""Client helpers for interacting with a vision-capable LLM."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from json import JSONDecodeError
from typing import Any, Optional

from httpx import RequestError, TimeoutException
from openai import OpenAI
from openai.types.responses import Response

logger = logging.getLogger(__name__)


@dataclass
class VisionLLMSettings:
    """Configuration required to talk to the vision model."""

    api_key: str
    model: str = "gpt-4o-mini"
    system_prompt: Optional[str] = None
    prompt: Optional[str] = None


@dataclass(slots=True)
class VisionLLMResult:
    """Container for the raw and parsed outputs from the vision model."""

    raw_text: str
    parsed_json: Any | None


class VisionLLMClient:
    """Thin wrapper around the OpenAI Responses API for vision requests."""

    def __init__(self, settings: VisionLLMSettings) -> None:
        self._settings = settings
        self._client = OpenAI(api_key=settings.api_key)

    @property
    def model(self) -> str:
        return self._settings.model

    def analyze_image(
        self,
        *,
        image_url: str,
        prompt: str | None = None,
        response_schema: dict[str, Any] | None = None,
        schema_name: str = "result",
    ) -> VisionLLMResult:
        """Send the given prompt and image reference to the configured LLM.

        ``image_url`` may be a ``data:`` URL or a remote URL; it is passed to
        the provider untouched. When ``response_schema`` is given the model is
        asked for strict structured output matching that JSON schema.
        """
        image_url = (image_url or "").strip()
        if not image_url:
            raise ValueError("image_url is empty")

        user_text = (prompt or "").strip() or self._settings.prompt
        if not user_text:
            raise ValueError(
                "prompt is required when AIRFRYER_LLM_PROMPT is not set"
            )

        content = []
        if self._settings.system_prompt:
            content.append(
                {
                    "role": "system",
                    "content": [
                        {
                            "type": "input_text",
                            "text": self._settings.system_prompt,
                        }
                    ],
                }
            )

        content.append(
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": user_text},
                    {"type": "input_image", "image_url": image_url, "detail": "auto"},
                ],
            }
        )

        request: dict[str, Any] = {
            "model": self._settings.model,
            "input": content,
        }
        if response_schema is not None:
            request["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": response_schema,
                    "strict": True,
                }
            }

        try:
            response: Response = self._client.responses.create(**request)
        except TimeoutException as e:
            logger.error("OpenAI / HTTP timeout: %r", e)
            raise
        except RequestError as e:
            logger.error("OpenAI / HTTP network error: %r", e)
            raise
        except Exception:
            logger.exception("OpenAI response error")
            raise

        output_text = response.output_text
        return VisionLLMResult(
            raw_text=output_text,
            parsed_json=self._attempt_json_parse(output_text),
        )

    @staticmethod
    def _attempt_json_parse(text: str) -> Any | None:
        """Try to convert the LLM's text output into JSON."""
        candidate = (text or "").strip()
        if not candidate:
            return None

        start = candidate.find("{")
        end = candidate.rfind("}")
        if start == -1 or end == -1 or end < start:
            return None
        candidate = candidate[start : end + 1]

        try:
            return json.loads(candidate)
        except JSONDecodeError:
            logger.debug("LLM output was not valid JSON", exc_info=True)
            return None


def init_vision_llm_client(settings: VisionLLMSettings) -> VisionLLMClient:
    """Create a ``VisionLLMClient`` instance from the provided settings."""

    return VisionLLMClient(settings)
