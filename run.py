"""Serve the Evently web client.

FLASK_ENV=development uses Flask's reloading dev server on localhost;
anything else runs under Gunicorn on all interfaces. The client reaches the
API at API_BASE_URL.
"""

import os

from gunicorn.app.base import BaseApplication

from evently.utils.logging_config import setup_logging
from evently.web import create_app

app = create_app()

class WebClientServer(BaseApplication):
    """Gunicorn application wrapping the Flask app object."""

    def __init__(self, application, options=None):
        self.options = options or {}
        self.application = application
        super().__init__()

    def load_config(self):
        for key, value in self.options.items():
            if key in self.cfg.settings and value is not None:
                self.cfg.set(key.lower(), value)

    def load(self):
        return self.application

def gunicorn_options(port: int) -> dict:
    return {
        'bind': f'0.0.0.0:{port}',
        'workers': int(os.environ.get('GUNICORN_WORKERS', 2)),
        'worker_class': 'sync',
        # Pages wait on the API, so allow for its timeout plus rendering
        'timeout': int(os.environ.get('API_TIMEOUT', 30)) + 30,
    }

def main():
    setup_logging()
    port = int(os.environ.get('PORT', 5001))
    if os.environ.get('FLASK_ENV', 'production') == 'development':
        app.run(host='localhost', port=port, debug=True)
    else:
        WebClientServer(app, gunicorn_options(port)).run()

if __name__ == '__main__':
    main()
