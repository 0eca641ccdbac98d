#!/usr/bin/env python3
"""
Run script for the CMMS core service
"""

from cmms import create_app
from cmms.build import build_database
from cmms.utils.logger import get_logger
import argparse
import sys
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = create_app()
logger = get_logger("cmms.run")


def parse_arguments():
    """Parse command line arguments for the database build"""
    parser = argparse.ArgumentParser(description='CMMS core service')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit without starting the server')
    parser.add_argument('--seed', action='store_true',
                        help='Load demo data after creating tables (skips kinds that already have rows)')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting CMMS core service...")

    results = build_database(app, seed=args.seed)
    for kind_name, result in results.items():
        logger.info(f"Seeded {kind_name}: {result['success']} created, {result['errors']} with errors")

    if args.build_only:
        logger.info("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST / FLASK_PORT: Server address (default: 127.0.0.1:5000)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=False)
