"""Endpoint that turns a food photo into air fryer settings."""

from __future__ import annotations

from flask import Blueprint, jsonify

from airfryer_backend.api.deps import (
    SubmissionTooLarge,
    get_food_identifier,
    llm_client_configured,
    read_submission_form,
)
from airfryer_backend.services.submission import (
    extract_photo_url,
    handle_identify_food,
    should_render_result,
)

bp = Blueprint("identify", __name__, url_prefix="/api")


@bp.post("/identify-food")
def identify_food_endpoint():
    """Identify the pictured food and suggest cooking time and temperature."""

    try:
        form = read_submission_form()
    except SubmissionTooLarge as exc:
        return jsonify(message=str(exc)), 413
    except ValueError as exc:
        return jsonify(message=str(exc)), 400

    result = handle_identify_food(form, get_food_identifier())
    if should_render_result(result):
        return jsonify(result)

    if extract_photo_url(form) is None:
        return jsonify(result), 400

    if not llm_client_configured():
        return jsonify(result), 503

    return jsonify(result), 502
