"""
Auth Routes for the Assignment Checker.
Handles registration, login, and the current user's profile.
Logout is client-side: the client discards its token.
"""
import logging
from flask import Blueprint, current_app, request, jsonify, g

from assignment_checker.auth import auth_configured, auth_unavailable_response, create_token
from assignment_checker.database import DuplicateEmailError

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
TEXT_FIELDS = ("email", "password", "name")


def _user_store():
    return current_app.extensions['user_store']


def _non_string_field(data):
    """Name of the first supplied text field whose value isn't a string, else None."""
    for field in TEXT_FIELDS:
        if data.get(field) is not None and not isinstance(data[field], str):
            return field
    return None


def _parse_body():
    """(data, error_response) for a JSON object body with string-valued fields."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({"error": "Invalid JSON body"}), 400)
    field = _non_string_field(data)
    if field:
        return None, (jsonify({"error": f"Field '{field}' must be a string"}), 400)
    return data, None


@auth_bp.route('/api/auth/register', methods=['POST'])
def register():
    """Create an account and return a session token."""
    # Refuse before inserting so a failed request leaves no account behind
    if not auth_configured():
        logger.error("Registration refused: JWT_SECRET not set")
        return auth_unavailable_response()

    data, error = _parse_body()
    if error:
        return error

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    name = (data.get("name") or "").strip() or None

    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({"error": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}), 400

    try:
        user = _user_store().create_user(email, password, name)
    except DuplicateEmailError:
        logger.info("Registration rejected, email in use: %s", email)
        return jsonify({"error": "Email already exists"}), 409

    logger.info("User registered: %s", email)
    return jsonify({
        "message": "User registered successfully",
        "user": user,
        "token": create_token(user),
    }), 201


@auth_bp.route('/api/auth/login', methods=['POST'])
def login():
    """Verify credentials and return a session token."""
    if not auth_configured():
        logger.error("Login refused: JWT_SECRET not set")
        return auth_unavailable_response()

    data, error = _parse_body()
    if error:
        return error

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400

    user = _user_store().verify_credentials(email, password)
    if user is None:
        logger.info("Failed login for %s", email)
        return jsonify({"error": "Invalid email or password"}), 401

    logger.info("User logged in: %s", email)
    return jsonify({
        "message": "Login successful",
        "user": user,
        "token": create_token(user),
    })


@auth_bp.route('/api/auth/me', methods=['GET'])
def get_profile():
    """Return the authenticated user's profile."""
    user = _user_store().get_user_by_id(g.user_id)
    if user is None:
        return jsonify({"error": "User not found"}), 404
    return jsonify({"user": user})


@auth_bp.route('/api/auth/me', methods=['PUT'])
def update_profile():
    """Update the authenticated user's name and/or email."""
    data, error = _parse_body()
    if error:
        return error
    if not any(k in data for k in ("name", "email")):
        return jsonify({"error": "Provide a name or email to update"}), 400

    email = data.get("email")
    if email is not None and not email.strip():
        return jsonify({"error": "Email cannot be empty"}), 400

    try:
        user = _user_store().update_user(g.user_id, name=data.get("name"), email=email)
    except DuplicateEmailError:
        return jsonify({"error": "Email already exists"}), 409

    if user is None:
        return jsonify({"error": "User not found"}), 404
    return jsonify({"message": "Profile updated", "user": user})
