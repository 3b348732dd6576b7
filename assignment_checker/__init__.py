"""
Assignment Checker Backend Package
==================================

Flask-based backend that rates how easily an assignment prompt can be
completed by generative AI.

Structure:
- routes/: API route blueprints
- services/: Extraction, prompting, model client, export, canary
- auth.py: Session tokens and the route guard
- database.py: User storage
- config.py: Configuration management
"""

from .config import config, Config

__version__ = "1.0.0"


def create_app(*args, **kwargs):
    """Build the Flask application (see assignment_checker.app.create_app)."""
    from .app import create_app as _create_app
    return _create_app(*args, **kwargs)


__all__ = ['config', 'Config', 'create_app']
