"""FastAPI dependencies: database sessions and the authenticated user."""

from typing import Annotated, Callable, Generator, Optional

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..auth import TokenError, TokenPayload, decode_access_token
from ..db import Database
from ..db.pagination import SQL_INT_MAX
from .errors import APIError, ErrorKind

bearer_scheme = HTTPBearer(auto_error=False)

# Path ids beyond the id column range are rejected with a 400 before any query runs
ResourceId = Annotated[int, Path(ge=1, le=SQL_INT_MAX)]

def get_database(request: Request) -> Database:
    """The Database created by the application lifespan."""
    return request.app.state.db

def get_session(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """One session per request; committed on success, rolled back on error."""
    with database.session() as session:
        yield session

def authenticate_jwt(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> TokenPayload:
    """Require a valid bearer token.

    Missing and invalid tokens both give 401; 403 is reserved for
    authenticated callers that lack permission.
    """
    if credentials is None:
        raise APIError(ErrorKind.UNAUTHORIZED, "Authentication required")
    try:
        return decode_access_token(credentials.credentials)
    except TokenError:
        raise APIError(ErrorKind.UNAUTHORIZED, "Invalid or expired token")

def require_role(*roles: str) -> Callable[..., TokenPayload]:
    """Dependency factory restricting a route to the given roles."""
    def dependency(user: TokenPayload = Depends(authenticate_jwt)) -> TokenPayload:
        if roles and user.role not in roles:
            raise APIError(ErrorKind.FORBIDDEN, "Forbidden - Insufficient permissions")
        return user
    return dependency

require_admin = require_role('admin')

def ensure_owner_or_admin(user: TokenPayload, owner_id: int, message: str) -> None:
    """Raise 403 unless the caller owns the resource or is an admin."""
    if owner_id != user.user_id and not user.is_admin:
        raise APIError(ErrorKind.FORBIDDEN, message)
