"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserAlreadyExistsError(AccountsServiceError):
    """Raised when registering an email that is already taken."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when the password does not match."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass
