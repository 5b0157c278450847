"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from voteboard.core.errors import UnauthenticatedError
from voteboard.db.session import SessionLocal, get_db
from voteboard.models import User
from voteboard.services.auth import TokenAuthorizationGate, get_authorization_gate
from voteboard.services.vote_service import VoteCoordinator

# Optional bearer scheme; endpoints decide whether anonymous access is allowed.
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_gate() -> TokenAuthorizationGate:
    """Return the authorization gate used by request handlers."""
    return get_authorization_gate()


def get_vote_coordinator() -> VoteCoordinator:
    """Return a vote coordinator bound to the application session factory."""
    return VoteCoordinator(SessionLocal)


GateDep = Annotated[TokenAuthorizationGate, Depends(get_gate)]
CoordinatorDep = Annotated[VoteCoordinator, Depends(get_vote_coordinator)]


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials is not None else None


def get_optional_actor_id(credentials: CredentialsDep, gate: GateDep) -> int | None:
    """Return the caller's actor id, or ``None`` for anonymous requests."""
    return gate.actor_id_or_none(_token(credentials))


def get_current_actor_id(credentials: CredentialsDep, gate: GateDep) -> int:
    """Return the caller's actor id.

    Raises:
        HTTPException: 401 if the request carries no valid bearer token.
    """
    try:
        return gate.resolve(_token(credentials))
    except UnauthenticatedError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


def get_current_user(
    actor_id: Annotated[int, Depends(get_current_actor_id)],
    db: SessionDep,
) -> User:
    """Load the authenticated user.

    Raises:
        HTTPException: 401 if the token refers to a user that no longer exists.
    """
    user = db.get(User, actor_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


OptionalActorDep = Annotated[int | None, Depends(get_optional_actor_id)]
CurrentActorDep = Annotated[int, Depends(get_current_actor_id)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
