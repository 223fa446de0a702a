"""Point-of-sale backend Flask application."""

from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask

from pos.config import AppConfig, load_env
from pos.db.session import build_engine, create_session_factory
from pos.models import Base
from pos.services.catalog_service import CatalogService
from pos.services.order_service import OrderService
from routes import api


def create_app(config: Optional[AppConfig] = None, session_factory=None) -> Flask:
    config = config or load_env()
    logging.basicConfig(level=config.log_level)

    if session_factory is None:
        engine = build_engine(config.database_url)
        # tables only; schema migrations are handled outside the app
        Base.metadata.create_all(engine)
        session_factory = create_session_factory(engine)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["POS_CONFIG"] = config

    components = {
        "order_service": OrderService(
            session_factory,
            strict_transitions=config.strict_status_transitions,
        ),
        "catalog_service": CatalogService(session_factory),
    }
    app.extensions["pos_components"] = components

    app.register_blueprint(api.api_bp)

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8080")), debug=False)


if __name__ == "__main__":
    main()
