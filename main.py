"""Serve the Evently API with uvicorn.

Development runs a single process on the imported app object. Production
passes the import string so uvicorn can start WEB_CONCURRENCY workers.
"""

import os

import uvicorn

from evently.config.environment import IS_PRODUCTION_ENVIRONMENT

APP_IMPORT_PATH = "evently.api.app:app"

def main():
    port = int(os.environ.get('PORT', 8000))
    if IS_PRODUCTION_ENVIRONMENT:
        uvicorn.run(
            APP_IMPORT_PATH,
            host="0.0.0.0",
            port=port,
            workers=int(os.environ.get('WEB_CONCURRENCY', 4)),
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
    else:
        from evently.api.app import app
        uvicorn.run(app, host="127.0.0.1", port=port, log_level="debug")

if __name__ == "__main__":
    main()
