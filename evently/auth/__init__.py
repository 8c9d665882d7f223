"""Authentication helpers: password hashing and JWT access tokens."""

from .passwords import hash_password, verify_password
from .tokens import TokenError, TokenPayload, create_access_token, decode_access_token

__all__ = [
    'hash_password',
    'verify_password',
    'TokenError',
    'TokenPayload',
    'create_access_token',
    'decode_access_token',
]
