"""API package wiring for the Air Fryer Temp backend."""

from flask import Flask

from .identify import bp as identify_bp


def init_app(app: Flask) -> None:
    """Register all API blueprints on the given application."""

    app.register_blueprint(identify_bp)
