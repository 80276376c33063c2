"""Server-rendered capture/upload page."""

from __future__ import annotations

from flask import Blueprint, Flask, render_template

from airfryer_backend.api.deps import get_food_identifier, read_submission_form
from airfryer_backend.services.submission import (
    RequestState,
    extract_photo_url,
    handle_identify_food,
)

bp = Blueprint("ui", __name__, template_folder="templates")


def _render(state: RequestState, photo_url: str | None = None):
    return render_template("index.html", state=state, photo_url=photo_url)


@bp.get("/")
def index():
    return _render(RequestState.idle())


@bp.post("/")
def submit():
    """Run the submitted photo through the model and re-render the page."""

    try:
        form = read_submission_form()
    except ValueError as exc:
        return _render(RequestState.from_result({"message": str(exc)}))

    result = handle_identify_food(form, get_food_identifier())
    return _render(RequestState.from_result(result), extract_photo_url(form))


def init_app(app: Flask) -> None:
    app.register_blueprint(bp)
