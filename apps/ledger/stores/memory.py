"""
In-memory ledger store.

Process-local and lost on restart; used for development and tests.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from apps.accounts.services.exceptions import UserAlreadyExistsError, UserNotFoundError

from ..domain import Account
from .base import LedgerStore, UserId, coerce_user_id


class InMemoryLedgerStore(LedgerStore):
    """Accounts keyed by id, with a per-user lock for buy/refund."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}
        self._guard = threading.Lock()
        self._user_locks: Dict[str, threading.Lock] = {}

    def get_by_id(self, user_id: UserId) -> Optional[Account]:
        key = coerce_user_id(user_id)
        if key is None:
            return None
        with self._guard:
            account = self._accounts.get(str(key))
            return account.copy() if account else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._guard:
            for account in self._accounts.values():
                if account.email == email:
                    return account.copy()
        return None

    def add(self, account: Account) -> Account:
        with self._guard:
            if any(a.email == account.email for a in self._accounts.values()):
                raise UserAlreadyExistsError("User already exists.")
            self._accounts[str(account.id)] = account.copy()
        return account.copy()

    def save(self, account: Account) -> Account:
        with self._guard:
            if str(account.id) not in self._accounts:
                raise UserNotFoundError("User not found.")
            self._accounts[str(account.id)] = account.copy()
        return account.copy()

    def list_all(self) -> List[Account]:
        with self._guard:
            return [account.copy() for account in self._accounts.values()]

    @contextmanager
    def lock(self, user_id: UserId) -> Iterator[None]:
        with self._guard:
            key = str(coerce_user_id(user_id) or user_id)
            user_lock = self._user_locks.setdefault(key, threading.Lock())
        with user_lock:
            yield

    def clear(self) -> None:
        with self._guard:
            self._accounts.clear()
            self._user_locks.clear()
