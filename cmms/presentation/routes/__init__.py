"""
Routes package for the maintenance management API
"""

from cmms.utils.logger import get_logger

logger = get_logger("cmms.routes")


def init_app(app):
    """Register all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .entities import bp as entities_bp
    app.register_blueprint(entities_bp, url_prefix='/api')
