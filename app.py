#!/usr/bin/env python3
"""
Run script for the roll ERP
"""

from dotenv import load_dotenv

# Load environment variables from .env file before the app reads them
load_dotenv()

import argparse  # noqa: E402
import os  # noqa: E402
import sys  # noqa: E402

from app import create_app  # noqa: E402
from app.build import build_database  # noqa: E402
from app.logger import get_logger  # noqa: E402

# Note: Admin credentials are configured via environment variables.
# Run 'python generate_env.py' to create .env file with secure passwords.

app = create_app()
logger = get_logger("roll_erp.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='Roll ERP order-to-shipment service')
    parser.add_argument('--build-only', action='store_true',
                        help='Create tables and the admin user, then exit without starting the web server')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    build_database(app)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
