"""
Flask route blueprints for the pen inventory backend.

This module contains all route handlers organized by functionality:
- main: Liveness and health
- orders: Temporary order staging and lookup
- log: Direct order log
- webhook: Payment webhook finalization

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .orders import orders_bp
from .log import log_bp
from .webhook import webhook_bp

__all__ = [
    "main_bp",
    "orders_bp",
    "log_bp",
    "webhook_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(log_bp)
    app.register_blueprint(webhook_bp)
