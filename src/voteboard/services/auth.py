"""Authorization gate resolving bearer tokens to actor ids."""
from __future__ import annotations

from jose import JWTError, jwt

from voteboard.core.errors import UnauthenticatedError
from voteboard.core.settings import settings

__all__ = ["TokenAuthorizationGate", "get_authorization_gate"]


class TokenAuthorizationGate:
    """Turns a request's bearer token into a stable actor id."""

    def __init__(self, secret_key: str | None = None, algorithm: str | None = None) -> None:
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.jwt_algorithm

    def resolve(self, token: str | None) -> int:
        """Return the actor id carried by ``token``.

        Raises:
            UnauthenticatedError: If the token is missing, malformed, expired, or
                has no integer subject.
        """
        if not token:
            raise UnauthenticatedError("Missing credentials")
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as err:
            raise UnauthenticatedError("Could not validate credentials") from err

        subject = payload.get("sub")
        if subject is None:
            raise UnauthenticatedError("Could not validate credentials")
        try:
            return int(subject)
        except (TypeError, ValueError) as err:
            raise UnauthenticatedError("Could not validate credentials") from err

    def actor_id_or_none(self, token: str | None) -> int | None:
        """Like :meth:`resolve`, but report an anonymous request as ``None``."""
        try:
            return self.resolve(token)
        except UnauthenticatedError:
            return None


def get_authorization_gate() -> TokenAuthorizationGate:
    """Return an authorization gate configured from settings."""
    return TokenAuthorizationGate()
