"""Shared API dependencies for authentication and common functionality."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gammy_feed.core.errors import (
    AuthenticationRequired,
    FeedError,
    LikeConflict,
    NotAuthorized,
    NotFound,
    ValidationFailed,
)
from gammy_feed.core.security import ROLE_ADMIN, decode_subject
from gammy_feed.db.session import get_db
from gammy_feed.models import User
from gammy_feed.services.actors import (
    ActorIdentity,
    AnonymousKeyResolver,
    get_anonymous_key_resolver,
    resolve_actor,
)
from gammy_feed.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

_ERROR_STATUS: dict[type[FeedError], int] = {
    ValidationFailed: status.HTTP_400_BAD_REQUEST,
    AuthenticationRequired: status.HTTP_401_UNAUTHORIZED,
    NotAuthorized: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    LikeConflict: status.HTTP_409_CONFLICT,
}


@contextmanager
def translate_errors(failure_detail: str) -> Iterator[None]:
    """Map domain and store errors raised inside the block to HTTP errors.

    Store errors are logged and reported with ``failure_detail`` only, so no
    internal detail reaches the client.
    """
    try:
        yield
    except FeedError as err:
        code = _ERROR_STATUS.get(type(err), status.HTTP_400_BAD_REQUEST)
        raise HTTPException(status_code=code, detail=str(err)) from err
    except SQLAlchemyError as err:
        logger.exception("%s", failure_detail)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure_detail,
        ) from err


def _load_user(token: str, db: Session) -> User:
    try:
        user_id = decode_subject(token)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    return _load_user(credentials.credentials, db)


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the authenticated user, or None for anonymous callers.

    An invalid or stale token is treated as no token at all.
    """
    if credentials is None:
        return None
    try:
        return _load_user(credentials.credentials, db)
    except HTTPException:
        logger.debug("Ignoring invalid bearer token on optional-auth route")
        return None


def get_admin_user(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Require the authenticated user to hold the admin role."""
    if user.role != ROLE_ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


def get_settings_store(db: SessionDep) -> SettingsStore:
    """Return the settings store bound to the request session."""
    return SettingsStore(db)


def get_anonymous_key_resolver_dep() -> AnonymousKeyResolver:
    """Return the configured resolver for anonymous actor keys."""
    return get_anonymous_key_resolver()


# Type aliases for user dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
AdminUserDep = Annotated[User, Depends(get_admin_user)]
SettingsStoreDep = Annotated[SettingsStore, Depends(get_settings_store)]


def get_actor(
    request: Request,
    user: OptionalUserDep,
    resolver: Annotated[AnonymousKeyResolver, Depends(get_anonymous_key_resolver_dep)],
) -> ActorIdentity:
    """Resolve the caller into an actor identity for likes."""
    return resolve_actor(request, user, resolver)


ActorDep = Annotated[ActorIdentity, Depends(get_actor)]
