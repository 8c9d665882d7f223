"""CORS configuration for the FastAPI application."""

import os

from ..db.pagination import (
    CURRENT_PAGE_HEADER,
    PER_PAGE_HEADER,
    TOTAL_COUNT_HEADER,
    TOTAL_PAGES_HEADER,
)

from .environment import IS_PRODUCTION_ENVIRONMENT

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],  # Development - allow all
    True: [        # Production - restricted to the configured frontends
        origin.strip()
        for origin in os.environ.get('CORS_ALLOWED_ORIGINS', '').split(',')
        if origin.strip()
    ]
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Authorization",  # Bearer tokens
    "Content-Type",   # For request bodies
    "Accept",        # For content negotiation
]

# Pagination metadata is sent as response headers and must be readable by browsers
EXPOSED_HEADERS = [
    TOTAL_COUNT_HEADER,
    TOTAL_PAGES_HEADER,
    CURRENT_PAGE_HEADER,
    PER_PAGE_HEADER,
]

# Additional CORS settings
CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": EXPOSED_HEADERS,
    "max_age": 3600,
}
