from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
import os
from cmms.utils.logger import get_logger

# Initialize extensions
db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection"""
    module = type(dbapi_connection).__module__
    if module.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_app(config=None):
    """
    Build the Flask application.

    Configuration is read from the environment; values in ``config`` win over
    the environment so tests can point the app at an in-memory database.

    Args:
        config (dict, optional): Explicit configuration overrides

    Returns:
        Flask: Configured application
    """
    from pathlib import Path

    app = Flask(__name__)

    logger = get_logger("cmms")
    logger.info("Initializing Flask application")

    # Prefer an explicit DATABASE_URL env var; otherwise keep a SQLite file
    # in the project's instance/ directory.
    config = dict(config or {})
    db_env = os.environ.get('DATABASE_URL')
    if 'SQLALCHEMY_DATABASE_URI' in config:
        pass
    elif db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        base_dir = Path(__file__).parent.parent
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'cmms.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Interactive search is capped; the pickers only ever show the top hits
    app.config['SEARCH_RESULT_LIMIT'] = int(os.environ.get('SEARCH_RESULT_LIMIT', '10'))
    app.config['IMPORT_DELIMITER'] = os.environ.get('IMPORT_DELIMITER', ',')
    app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_CONTENT_LENGTH', str(10 * 1024 * 1024)))

    app.config.update(config)

    if len(app.config['IMPORT_DELIMITER']) != 1:
        logger.critical(f"IMPORT_DELIMITER must be a single character, got {app.config['IMPORT_DELIMITER']!r}")
        raise RuntimeError("IMPORT_DELIMITER must be a single character")

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Keep column order of records in responses
    app.json.sort_keys = False

    db.init_app(app)

    # Import models to ensure they're registered with SQLAlchemy
    from cmms import data  # noqa: F401

    logger.debug("Models imported and registered")

    from cmms.presentation.routes import init_app as init_routes
    init_routes(app)

    logger.info("Flask application initialization complete")

    return app
