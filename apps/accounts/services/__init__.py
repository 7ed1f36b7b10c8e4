"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from .user_registration import register_user, normalize_email
from .user_authentication import authenticate_user
from .user_lookup import find_user_by_email, find_user_by_id, list_users

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserAlreadyExistsError',
    'InvalidCredentialsError',
    'UserNotFoundError',
    # Services
    'register_user',
    'normalize_email',
    'authenticate_user',
    'find_user_by_email',
    'find_user_by_id',
    'list_users',
]
