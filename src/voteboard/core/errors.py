"""Error taxonomy shared by the Voteboard services."""


class VoteboardError(Exception):
    """Base class for domain errors raised by services and repositories."""


class UnauthenticatedError(VoteboardError):
    """Raised when a request carries no usable actor identity."""


class NotFoundError(VoteboardError):
    """Raised when a referenced entity does not exist."""


class ConflictError(VoteboardError):
    """Raised when a write lost a race against a concurrent writer.

    The vote coordinator recovers from this by retrying the whole unit of work.
    """


class StorageFailureError(VoteboardError):
    """Raised when a unit of work could not be committed."""


class PermissionDeniedError(VoteboardError):
    """Raised when an authenticated actor may not touch a resource."""


class ValidationError(VoteboardError):
    """Raised when user-supplied input fails a business rule.

    Attributes:
        field: Name of the offending input field.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
