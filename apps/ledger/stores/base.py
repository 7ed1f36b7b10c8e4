"""Persistence boundary for ledger accounts."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

from ..domain import Account

UserId = Union[uuid.UUID, str]


def coerce_user_id(user_id: UserId) -> Optional[uuid.UUID]:
    """Return ``user_id`` as a UUID, or None when it cannot be one."""
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except (TypeError, ValueError, AttributeError):
        return None


class LedgerStore(ABC):
    """
    Keyed storage of Account snapshots.

    Reads return detached copies; callers mutate the copy and pass it to
    ``save``. ``lock`` serialises read-modify-write cycles for one user.
    """

    @abstractmethod
    def get_by_id(self, user_id: UserId) -> Optional[Account]:
        """Return the account or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        """Return the account registered under ``email`` or None."""

    @abstractmethod
    def add(self, account: Account) -> Account:
        """
        Store a new account.

        Raises:
            UserAlreadyExistsError: If the email is already registered
        """

    @abstractmethod
    def save(self, account: Account) -> Account:
        """
        Persist balance, inventory and any new history entries.

        Raises:
            UserNotFoundError: If the account was never added
        """

    @abstractmethod
    def list_all(self) -> List[Account]:
        """Return every account, oldest first."""

    @contextmanager
    def lock(self, user_id: UserId) -> Iterator[None]:
        """Hold exclusive access to one user's record for the block."""
        yield
