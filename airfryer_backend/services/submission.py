"""Mediates between submitted photo forms and the food identification call."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping

from .cooking import CookingInstructions

logger = logging.getLogger(__name__)

PHOTO_FIELD = "photoUrl"
MISSING_IMAGE_MESSAGE = "Please upload a photo of the food."
NO_INSTRUCTIONS_MESSAGE = "No cooking instructions were returned."

IdentifyFood = Callable[[str], CookingInstructions]
SubmissionResult = dict[str, str]


def extract_photo_url(form: Mapping[str, Any] | None) -> str | None:
    """Return the submitted image reference, or ``None`` when unusable."""

    if not form:
        return None
    photo_url = form.get(PHOTO_FIELD)
    if not isinstance(photo_url, str):
        return None
    photo_url = photo_url.strip()
    return photo_url or None


def handle_identify_food(
    form: Mapping[str, Any] | None, identify: IdentifyFood
) -> SubmissionResult:
    """Run one submission and return either the instructions or a message."""

    photo_url = extract_photo_url(form)
    if photo_url is None:
        logger.info("submission rejected: no photo supplied")
        return {"message": MISSING_IMAGE_MESSAGE}

    try:
        instructions = identify(photo_url)
    except Exception as exc:
        logger.warning("food identification failed: %s", exc)
        return {"message": str(exc) or exc.__class__.__name__}

    return instructions.to_payload()


def should_render_result(result: Mapping[str, Any] | None) -> bool:
    """The result panel is shown only for results naming a food."""

    return bool(result and result.get("foodName"))


@dataclass(frozen=True, slots=True)
class RequestState:
    """Transient UI state for a single submission."""

    status: Literal["idle", "pending", "success", "failure"]
    instructions: dict[str, str] | None = None
    message: str | None = None

    @classmethod
    def idle(cls) -> "RequestState":
        return cls(status="idle")

    @classmethod
    def pending(cls) -> "RequestState":
        return cls(status="pending")

    @classmethod
    def from_result(cls, result: Mapping[str, Any] | None) -> "RequestState":
        if should_render_result(result):
            return cls(status="success", instructions=dict(result or {}))

        message = (result or {}).get("message") or NO_INSTRUCTIONS_MESSAGE
        return cls(status="failure", message=str(message))
