"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors.

    The underlying infrastructure failure, if any, is kept on ``cause``
    (and as ``__cause__`` when raised with ``from``).
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class AuthenticationError(DomainError):
    """Login could not establish who the viewer is."""


class AuthorizationError(DomainError):
    """No authenticated viewer for an operation that needs one."""


class ProcessorError(DomainError):
    """Payment processor exchange produced nothing usable."""


class ConsistencyError(DomainError):
    """A store update that had to match a user record matched none."""
