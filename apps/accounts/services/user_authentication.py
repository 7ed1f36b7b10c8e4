"""User authentication service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.contrib.auth.hashers import check_password

from apps.ledger.domain import Account
from .exceptions import InvalidCredentialsError, UserNotFoundError
from .user_registration import normalize_email

if TYPE_CHECKING:
    from apps.ledger.stores import LedgerStore

logger = logging.getLogger(__name__)


def authenticate_user(*, store: LedgerStore, email: str, password: str) -> Account:
    """
    Authenticate user with email and password against the stored hash.

    Args:
        store: Ledger store holding the account
        email: User's email
        password: Password to verify

    Returns:
        Authenticated Account

    Raises:
        UserNotFoundError: If no user has this email
        InvalidCredentialsError: If the password does not match
    """
    account = store.get_by_email(normalize_email(email))
    if account is None:
        raise UserNotFoundError("User not found.")

    if not check_password(password, account.password):
        logger.info("Rejected login for %s: wrong password", account.email)
        raise InvalidCredentialsError("Incorrect password.")

    return account
