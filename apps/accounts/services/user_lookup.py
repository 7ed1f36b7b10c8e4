"""User lookup services."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from apps.ledger.domain import Account
from .exceptions import UserNotFoundError
from .user_registration import normalize_email

if TYPE_CHECKING:
    from apps.ledger.stores import LedgerStore


def find_user_by_email(*, store: LedgerStore, email: str) -> Account:
    """
    Get a user by email.

    Raises:
        UserNotFoundError: If no user has this email
    """
    account = store.get_by_email(normalize_email(email))
    if account is None:
        raise UserNotFoundError("User not found.")
    return account


def find_user_by_id(*, store: LedgerStore, user_id) -> Account:
    """
    Get a user by id.

    Raises:
        UserNotFoundError: If the user does not exist
    """
    account = store.get_by_id(user_id)
    if account is None:
        raise UserNotFoundError("User not found.")
    return account


def list_users(*, store: LedgerStore) -> List[Account]:
    """
    All users with the password hash blanked out.

    Callers render these for the community listing, so the credential
    never leaves this function.
    """
    users = []
    for account in store.list_all():
        public = account.copy()
        public.password = ''
        users.append(public)
    return users
