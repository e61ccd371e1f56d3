from flask import Blueprint, jsonify, request
from flask_wtf.csrf import generate_csrf
from flask_login import login_user, logout_user, login_required, current_user
from app.data.core.user_info.user import User
from app import limiter
from app.logger import get_logger
from app.utils.logging_sanitizer import sanitize_payload

logger = get_logger("roll_erp.auth")
auth = Blueprint('auth', __name__)


def _credentials():
    if request.is_json:
        data = request.get_json(silent=True) or {}
    else:
        data = request.form.to_dict()
    return data.get('username'), data.get('password'), data


@auth.route('/csrf-token', methods=['GET'])
def csrf_token():
    """Token for the X-CSRFToken header on state-changing API calls"""
    return jsonify({"csrfToken": generate_csrf()}), 200


@auth.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    if current_user.is_authenticated:
        logger.debug(f"User {current_user.username} already authenticated")
        return jsonify({"success": True, "username": current_user.username}), 200

    username, password, data = _credentials()
    logger.debug(f"Login attempt: {sanitize_payload(data)}")

    if not username or not password:
        logger.warning(f"Login attempt with missing credentials for username: {username}")
        return jsonify({"error": "Please enter both username and password"}), 400

    user = User.query.filter_by(username=username).first()

    if user is None or not user.check_password(password):
        logger.warning(f"Failed login attempt for username: {username}")
        return jsonify({"error": "Invalid username or password"}), 401

    if not user.is_active:
        logger.warning(f"Login attempt for disabled account: {username}")
        return jsonify({"error": "Account is disabled"}), 401

    login_user(user)
    logger.info(f"Successful login for user: {username}")
    return jsonify({"success": True, "username": user.username}), 200


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    return jsonify({"success": True}), 200
