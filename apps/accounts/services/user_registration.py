"""User registration service."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from django.conf import settings
from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.hashers import make_password

from apps.ledger.domain import Account
from .exceptions import UserAlreadyExistsError

if TYPE_CHECKING:
    from apps.ledger.stores import LedgerStore

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Strip whitespace and lowercase the domain part."""
    return BaseUserManager.normalize_email((email or '').strip())


def register_user(
    *,
    store: LedgerStore,
    email: str,
    name: str,
    password: str,
) -> Account:
    """
    Register a new user with the starting V-Bucks grant.

    Args:
        store: Ledger store to create the account in
        email: User's email address (must be unused)
        name: Display name
        password: Plain password (stored as a salted hash)

    Returns:
        Created Account with balance = INITIAL_BALANCE, empty inventory and history

    Raises:
        UserAlreadyExistsError: If the email is already registered
    """
    email = normalize_email(email)

    if store.get_by_email(email) is not None:
        raise UserAlreadyExistsError("User already exists.")

    account = store.add(Account(
        id=uuid.uuid4(),
        email=email,
        name=name or '',
        password=make_password(password),
        balance=settings.INITIAL_BALANCE,
    ))

    logger.info("Registered user %s (%s)", account.id, account.email)
    return account
