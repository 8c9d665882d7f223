"""Runtime environment selection.

Import this before anything that reads environment variables: it loads
``.env`` through python-dotenv. On the hosting platform the variables are
set directly and the file is absent.

ENVIRONMENT is 'development' or 'production'. Anything else is treated as
development and logged.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

DEVELOPMENT = 'development'
PRODUCTION = 'production'

_configured = os.environ.get('ENVIRONMENT', '').strip().lower()
if _configured not in (DEVELOPMENT, PRODUCTION):
    logging.getLogger(__name__).warning(
        f"ENVIRONMENT={_configured!r} is not one of {DEVELOPMENT!r} or {PRODUCTION!r}; "
        f"running as {DEVELOPMENT}"
    )
    _configured = DEVELOPMENT

ENVIRONMENT = _configured
IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT == PRODUCTION

__all__ = ['ENVIRONMENT', 'IS_PRODUCTION_ENVIRONMENT']
