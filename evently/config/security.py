"""JWT and password hashing configuration."""

import os
from dataclasses import dataclass
from typing import Dict, Any

from .environment import IS_PRODUCTION_ENVIRONMENT

DEVELOPMENT_JWT_SECRET = "evently-development-secret"

@dataclass
class JWTConfig:
    """JWT configuration settings."""

    secret: str = ""
    algorithm: str = ""
    expire_hours: int = 0

    def __post_init__(self):
        """Load settings from environment if not provided."""
        if not self.secret:
            self.secret = os.environ.get('JWT_SECRET', '')
            if not self.secret and not IS_PRODUCTION_ENVIRONMENT:
                self.secret = DEVELOPMENT_JWT_SECRET
        if not self.algorithm:
            self.algorithm = os.environ.get('JWT_ALGORITHM', 'HS256')
        if not self.expire_hours:
            self.expire_hours = int(os.environ.get('JWT_EXPIRE_HOURS', '24'))

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            'algorithm': self.algorithm,
            'expire_hours': self.expire_hours,
        }

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.secret:
            raise ValueError("JWT_SECRET environment variable is required")
        if self.expire_hours <= 0:
            raise ValueError("JWT_EXPIRE_HOURS must be a positive number of hours")
        return True

def get_jwt_config() -> JWTConfig:
    """Get JWT configuration with validation."""
    config = JWTConfig()
    config.validate()
    return config
