"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sponsormatch.core.context import UserContext
from sponsormatch.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    SponsorMatchError,
    StorageError,
    TransientIOError,
    ValidationError,
)
from sponsormatch.core.security import JWTError, decode_access_token
from sponsormatch.db.session import get_db
from sponsormatch.models import UserAccount
from sponsormatch.services.message_log import MessageHub, get_message_hub
from sponsormatch.services.storage import ObjectStorage, get_object_storage

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_storage_dep() -> ObjectStorage:
    """Return the configured object storage backend."""
    return get_object_storage()


def get_message_hub_dep() -> MessageHub:
    """Return the shared live-message hub."""
    return get_message_hub()


StorageDep = Annotated[ObjectStorage, Depends(get_storage_dep)]
MessageHubDep = Annotated[MessageHub, Depends(get_message_hub_dep)]

_STATUS_BY_ERROR: list[tuple[type[SponsorMatchError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    # TransientIOError must be checked before its StorageError parent.
    (TransientIOError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StorageError, status.HTTP_502_BAD_GATEWAY),
]


def http_error(exc: SponsorMatchError) -> HTTPException:
    """Translate a domain error into the HTTP error reported to clients."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> UserContext:
    """Build the caller's session context from the JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        The authenticated user's context

    Raises:
        HTTPException: If token is invalid or the account no longer exists
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    subject = payload.get("sub")
    if not isinstance(subject, str):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    account = db.get(UserAccount, subject)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return UserContext(user_id=account.user_id, user_type=account.user_type)  # type: ignore[arg-type]


# Type alias for current user dependency
CurrentUserDep = Annotated[UserContext, Depends(get_current_user)]
