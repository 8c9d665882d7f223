"""JWT access tokens.

Tokens carry the user's id, username and role so that authorization checks
do not need a database round trip.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..config.security import JWTConfig, get_jwt_config

logger = logging.getLogger(__name__)

class TokenError(Exception):
    """Raised when a token cannot be decoded, has expired, or lacks required claims."""
    pass

@dataclass(frozen=True)
class TokenPayload:
    """The identity carried by an access token."""
    user_id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'

def create_access_token(
    user_id: int,
    username: str,
    role: str,
    config: Optional[JWTConfig] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token"""
    config = config or get_jwt_config()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(hours=config.expire_hours))

    to_encode = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, config.secret, algorithm=config.algorithm)

def decode_access_token(token: str, config: Optional[JWTConfig] = None) -> TokenPayload:
    """Decode and validate JWT access token.

    Raises:
        TokenError: If the signature is invalid, the token expired, or a claim is missing
    """
    config = config or get_jwt_config()
    try:
        claims = jwt.decode(token, config.secret, algorithms=[config.algorithm])
        return TokenPayload(
            user_id=int(claims["sub"]),
            username=claims["username"],
            role=claims.get("role") or "user",
        )
    except JWTError as e:
        raise TokenError(str(e)) from e
    except (KeyError, TypeError, ValueError) as e:
        raise TokenError(f"Malformed token claims: {e}") from e
