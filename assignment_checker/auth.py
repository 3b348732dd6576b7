"""
JWT Authentication for the Assignment Checker.
Issues session tokens and validates Bearer tokens on protected /api/ routes.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app, request, jsonify, g

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'

# Routes that always require authentication
PROTECTED_EXACT = [
    '/api/auth/me',
]

# Protected only when REQUIRE_AUTH_FOR_ANALYZE is enabled
ANALYZE_ROUTES = [
    '/api/analyze',
]


def get_jwt_secret():
    """Get the signing secret from the app config."""
    secret = current_app.config.get('JWT_SECRET')
    if not secret:
        raise RuntimeError('JWT_SECRET not configured')
    return secret


def auth_configured():
    """True when a signing secret is available for issuing and checking tokens."""
    return bool(current_app.config.get('JWT_SECRET'))


def auth_unavailable_response():
    return jsonify({'error': 'Authentication is not configured on this server'}), 503


def create_token(user, secret=None, expires_hours=None):
    """
    Issue a signed session token for a user dict (needs 'id' and 'email').
    """
    secret = secret or get_jwt_secret()
    if expires_hours is None:
        expires_hours = current_app.config.get('JWT_EXPIRES_HOURS', 24)
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user['id']),
        'email': user.get('email', ''),
        'iat': now,
        'exp': now + timedelta(hours=expires_hours),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def validate_token(token, secret=None):
    """
    Validate a session token and return the decoded payload.
    Returns None if invalid.
    """
    try:
        return jwt.decode(token, secret or get_jwt_secret(), algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def is_protected_route(path):
    """Check if a route requires a Bearer token."""
    if path in PROTECTED_EXACT:
        return True
    if current_app.config.get('REQUIRE_AUTH_FOR_ANALYZE') and path in ANALYZE_ROUTES:
        return True
    return False


def init_auth(app):
    """
    Register the before_request auth hook on the Flask app.
    Call this BEFORE registering blueprints.
    """
    @app.before_request
    def check_auth():
        # CORS preflight is never gated
        if request.method == 'OPTIONS':
            return None

        if not is_protected_route(request.path):
            return None

        if not auth_configured():
            logger.error("JWT_SECRET not set; cannot check token for %s", request.path)
            return auth_unavailable_response()

        # Extract token from Authorization header
        auth_header = request.headers.get('Authorization', '')
        if not auth_header.startswith('Bearer '):
            logger.info("Missing bearer token for %s", request.path)
            return jsonify({'error': 'Authentication required'}), 401

        token = auth_header[7:]  # Strip 'Bearer '
        payload = validate_token(token)
        if payload is None or not str(payload.get('sub', '')).isdigit():
            logger.info("Rejected invalid or expired token for %s", request.path)
            return jsonify({'error': 'Invalid or expired token'}), 401

        # Attach user info to Flask's g object for use in route handlers
        g.user_id = int(payload['sub'])
        g.user_email = payload.get('email', '')
