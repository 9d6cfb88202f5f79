"""Mega-Sena wager simulator Flask application package."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dotenv import load_dotenv
from flask import Flask

if TYPE_CHECKING:
    from sena_simulator.config import BaseConfig


def create_app(config: type[BaseConfig] | None = None) -> Flask:
    """Application factory.

    Args:
        config: configuration class; resolved from APP_ENV when omitted.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from sena_simulator.config import get_config
    from sena_simulator.error_handlers import register_error_handlers
    from sena_simulator.extensions import init_services
    from sena_simulator.logging_config import configure_logging
    from sena_simulator.routes.games import games_bp
    from sena_simulator.routes.health import health_bp
    from sena_simulator.routes.history import history_bp
    from sena_simulator.routes.simulations import simulations_bp
    from sena_simulator.routes.wager import wager_bp

    app = Flask(__name__)
    app.config.from_object(config or get_config())

    configure_logging(app)
    init_services(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(wager_bp)
    app.register_blueprint(games_bp)
    app.register_blueprint(simulations_bp)
    app.register_blueprint(history_bp)

    return app
