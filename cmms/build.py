#!/usr/bin/env python3
"""
Database build for the CMMS core
Creates every entity table and optionally loads demo data
"""

from cmms import db
from cmms.utils.logger import get_logger

logger = get_logger("cmms.build")


def create_tables():
    """Create all mapped tables that do not exist yet (must run inside an app context)"""
    # Importing the package registers every model with the metadata
    from cmms import data  # noqa: F401

    db.create_all()
    logger.info(f"Tables ready: {', '.join(sorted(db.metadata.tables))}")


def build_database(app, seed=False):
    """
    Build the database for ``app``.

    Args:
        app (Flask): Application whose database is built
        seed (bool): Load demo data after the tables are created

    Returns:
        dict: Import result per seeded kind (empty when not seeding)
    """
    logger.info("Building database...")
    with app.app_context():
        create_tables()

        if not seed:
            logger.info("Build complete (no demo data)")
            return {}

        from cmms.debug.demo_data import insert_demo_data
        results = insert_demo_data()

    logger.info("Build complete")
    return results
