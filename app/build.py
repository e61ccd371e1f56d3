#!/usr/bin/env python3
"""
Database build for the roll ERP
Creates the tables and makes sure an administrator account exists
"""

import os

from app import create_app, db
from app.logger import get_logger

logger = get_logger("roll_erp.build")

DEFAULT_ADMIN_USERNAME = 'admin'


def ensure_admin_user():
    """
    Create the administrator account from ADMIN_USERNAME / ADMIN_PASSWORD
    when it does not exist yet.

    Returns:
        User or None: The admin user, or None when no password is configured
    """
    from app.data.core.user_info.user import User

    username = os.environ.get('ADMIN_USERNAME', DEFAULT_ADMIN_USERNAME)
    user = User.query.filter_by(username=username).first()
    if user is not None:
        logger.info(f"Admin user '{username}' already present")
        return user

    password = os.environ.get('ADMIN_PASSWORD')
    if not password:
        logger.warning("ADMIN_PASSWORD not set; skipping admin user creation (run generate_env.py)")
        return None

    user = User.create_from_dict({
        'username': username,
        'email': os.environ.get('ADMIN_EMAIL'),
        'password': password,
        'is_admin': True,
        'is_active': True,
    })
    logger.info(f"Created admin user '{username}'")
    return user


def build_database(app=None):
    """
    Create all tables and the admin user

    Args:
        app: Flask app to build against (a new one is created when omitted)
    """
    app = app or create_app()
    with app.app_context():
        logger.info("Creating database tables")
        db.create_all()
        ensure_admin_user()
        logger.info("Database build complete")
