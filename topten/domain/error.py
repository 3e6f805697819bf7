"""Domain layer errors.

Every error carries a short user-facing message; the interface layer maps
each class to an HTTP status.
"""


class DomainError(Exception):
    """Base domain error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed or missing input."""

    pass


class DuplicateEmailError(DomainError):
    """An account with this email already exists."""

    def __init__(self) -> None:
        super().__init__("An account with this email already exists")


class DuplicateUsernameError(DomainError):
    """The requested username is taken."""

    def __init__(self) -> None:
        super().__init__("This username is already taken")


class InvalidCredentialsError(DomainError):
    """Unknown email or wrong password. Deliberately indistinguishable."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class FederatedOnlyAccountError(DomainError):
    """Password login attempted on an account without a password."""

    def __init__(self) -> None:
        super().__init__(
            'This account uses Google sign-in. Please use "Sign in with Google" instead.'
        )


class UnauthenticatedError(DomainError):
    """No logged-in session where one is required."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")


class ForbiddenError(DomainError):
    """Action attempted on a resource the caller does not own."""

    pass


class AlreadyVotedError(DomainError):
    """Vote resubmitted for the list the user already voted for."""

    def __init__(self) -> None:
        super().__init__("You already voted for this list")


class ListNotPublicError(DomainError):
    """Vote attempted on a private list."""

    def __init__(self) -> None:
        super().__init__("Cannot vote on private lists")


class FederatedLoginError(DomainError):
    """Federated login could not be completed.

    ``code`` is a short machine-readable reason used in redirect URLs.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


class ConstraintViolationError(DomainError):
    """A storage unique constraint rejected a write."""

    def __init__(self, constraint: str | None = None):
        self.constraint = constraint
        super().__init__(f"Constraint violated: {constraint or 'unknown'}")


class StorageFailureError(DomainError):
    """Unexpected backing-store failure. Detail is never shown to callers."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("An error occurred")
