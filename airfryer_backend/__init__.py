import logging
import os

from flask import Flask, jsonify

from airfryer_backend.api import init_app as init_api
from airfryer_backend.config import (
    DEFAULT_LLM_MODEL,
    DEFAULT_LLM_SYSTEM_PROMPT,
    DEFAULT_MAX_UPLOAD_BYTES,
    IDENTIFY_FOOD_PROMPT,
)
from airfryer_backend.services.llm import (
    VisionLLMSettings,
    init_vision_llm_client,
)
from airfryer_backend.ui import init_app as init_ui


def create_app() -> Flask:
    """Application factory for the Air Fryer Temp backend."""
    app = Flask(__name__)

    app.config["IDENTIFY_FOOD_PROMPT"] = (
        os.environ.get("AIRFRYER_LLM_PROMPT") or IDENTIFY_FOOD_PROMPT
    )
    app.config["MAX_CONTENT_LENGTH"] = _read_max_upload_bytes(app)
    # Photos arrive as data URLs inside ordinary form fields.
    app.config["MAX_FORM_MEMORY_SIZE"] = app.config["MAX_CONTENT_LENGTH"]

    _configure_logging(app)

    @app.get("/healthz")
    def healthcheck():
        return jsonify(status="ok")

    @app.get("/api/healthz")
    def api_healthcheck():
        return jsonify(status="ok")

    llm_api_key = os.environ.get("AIRFRYER_LLM_API_KEY") or os.environ.get(
        "OPENAI_API_KEY"
    )
    llm_model = os.environ.get("AIRFRYER_LLM_MODEL", DEFAULT_LLM_MODEL)

    if llm_api_key:
        app.extensions["vision_llm_client"] = init_vision_llm_client(
            VisionLLMSettings(
                api_key=llm_api_key,
                model=llm_model,
                system_prompt=DEFAULT_LLM_SYSTEM_PROMPT,
                prompt=app.config["IDENTIFY_FOOD_PROMPT"],
            )
        )
        app.logger.info("vision LLM client configured", extra={"model": llm_model})
    else:
        app.logger.warning(
            "AIRFRYER_LLM_API_KEY/OPENAI_API_KEY not set; food identification disabled"
        )

    init_api(app)
    init_ui(app)

    return app


def _configure_logging(app: Flask) -> None:
    """Ensure application and root loggers emit INFO-level logs."""

    logging.basicConfig(level=logging.INFO)
    logging.getLogger().setLevel(logging.INFO)
    app.logger.setLevel(logging.INFO)


def _read_max_upload_bytes(app: Flask) -> int:
    raw_value = os.environ.get("AIRFRYER_MAX_UPLOAD_BYTES")
    if not raw_value:
        return DEFAULT_MAX_UPLOAD_BYTES

    try:
        return int(raw_value)
    except ValueError:
        app.logger.warning(
            "invalid AIRFRYER_MAX_UPLOAD_BYTES=%s; using %s",
            raw_value,
            DEFAULT_MAX_UPLOAD_BYTES,
        )
        return DEFAULT_MAX_UPLOAD_BYTES


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000)
