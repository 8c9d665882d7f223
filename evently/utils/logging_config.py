"""Logging configuration for the API, the web client and the scripts."""

import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ('urllib3', 'sqlalchemy.engine', 'passlib', 'multipart')

def setup_logging():
    """Send log records to stdout at LOG_LEVEL (default INFO).

    Safe to call more than once; the handler is installed a single time.
    """
    root_logger = logging.getLogger()
    if any(getattr(handler, '_evently', False) for handler in root_logger.handlers):
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._evently = True

    level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.getLogger('evently').setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
