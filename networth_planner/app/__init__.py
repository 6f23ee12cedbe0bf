"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from networth_planner.app.api.routes import api_bp
from networth_planner.config import Settings, get_settings
from networth_planner.storage import SnapshotStore


def create_app(settings: Optional[Settings] = None, store: Optional[SnapshotStore] = None) -> Flask:
    """Build the Flask app instance; the snapshot store is injected, never global."""
    settings = settings or get_settings()

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["snapshot_store"] = store or SnapshotStore(settings.snapshot_path)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
