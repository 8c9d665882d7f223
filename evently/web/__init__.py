"""Server-rendered web client.

The Flask app holds no database of its own: every page is built from the
Evently API through ``EventlyAPIClient``, with the caller's token kept in the
signed session cookie.
"""

import logging

from flask import Flask, render_template, session

from .config import Config
from .routes import admin_bp, events_bp

logger = logging.getLogger(__name__)

def create_app(config_class=Config):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    app.register_blueprint(events_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    @app.context_processor
    def inject_current_user():
        return {
            'current_user': {
                'username': session.get('username'),
                'is_admin': session.get('role') == 'admin',
                'logged_in': bool(session.get('token')),
            }
        }

    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error in web client: {error}")
        return render_template('errors/500.html'), 500

    logger.debug(f"Web client configured against API at {app.config['API_BASE_URL']}")
    return app
