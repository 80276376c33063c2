"""Shared API dependencies and helpers."""

from __future__ import annotations

from typing import Any

from flask import current_app, request
from werkzeug.exceptions import RequestEntityTooLarge

from airfryer_backend.services.cooking import CookingInstructions, identify_food
from airfryer_backend.services.llm import VisionLLMClient
from airfryer_backend.services.submission import PHOTO_FIELD, extract_photo_url
from airfryer_backend.services.uploads import encode_image_upload

UPLOAD_FIELD = "image"


def get_llm_client() -> VisionLLMClient:
    """Return the vision LLM client configured by the app factory."""

    client: VisionLLMClient | None = current_app.extensions.get(
        "vision_llm_client"
    )
    if client is None:
        raise RuntimeError("vision LLM client is not configured")
    return client


def llm_client_configured() -> bool:
    return current_app.extensions.get("vision_llm_client") is not None


def get_food_identifier():
    """Return a callable that identifies the food in one image reference.

    The client is looked up when the callable runs, so a missing client only
    surfaces for submissions that actually reach the model.
    """

    def _identify(photo_url: str) -> CookingInstructions:
        return identify_food(
            photo_url,
            client=get_llm_client(),
            prompt=current_app.config.get("IDENTIFY_FOOD_PROMPT"),
        )

    return _identify


class SubmissionTooLarge(ValueError):
    """Raised when the submitted photo exceeds the configured upload limit."""


def read_submission_form() -> dict[str, Any]:
    """Collect the submitted photo from JSON, form fields or a file upload.

    Raises ``ValueError`` when an uploaded file cannot be used and
    ``SubmissionTooLarge`` when the request is over the size limit.
    """

    try:
        if request.is_json:
            payload = request.get_json(silent=True)
            return dict(payload) if isinstance(payload, dict) else {}

        form: dict[str, Any] = {PHOTO_FIELD: request.form.get(PHOTO_FIELD)}
        if extract_photo_url(form) is None and UPLOAD_FIELD in request.files:
            form[PHOTO_FIELD] = encode_image_upload(request.files[UPLOAD_FIELD])
    except RequestEntityTooLarge as exc:
        raise SubmissionTooLarge(
            "The photo is too large. Please use a smaller image."
        ) from exc
    return form
