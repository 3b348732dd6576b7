"""
Assignment Checker API Routes
=============================

All API route blueprints for the Assignment Checker application.

Usage:
    from assignment_checker.routes import register_routes
    register_routes(app)
"""
from .analysis_routes import analysis_bp
from .auth_routes import auth_bp


def register_routes(app):
    """Register all route blueprints with the Flask app."""
    app.register_blueprint(analysis_bp)
    app.register_blueprint(auth_bp)


__all__ = [
    'register_routes',
    'analysis_bp',
    'auth_bp',
]
