"""
JSON file ledger store.

All accounts live in one JSON document (a list of account dicts), read and
rewritten whole on every change, the same shape a browser keeps in local
storage. Writes go through a temporary file and ``os.replace``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from apps.accounts.services.exceptions import UserAlreadyExistsError, UserNotFoundError

from ..domain import Account
from .base import LedgerStore, UserId, coerce_user_id

logger = logging.getLogger(__name__)


class JsonFileLedgerStore(LedgerStore):
    """File-backed store; one process-wide lock guards the whole document."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def _read(self) -> List[Account]:
        if not self.path.exists():
            return []
        with self.path.open('r', encoding='utf-8') as fh:
            raw = fh.read()
        if not raw.strip():
            return []
        return [Account.from_dict(item) for item in json.loads(raw)]

    def _write(self, accounts: List[Account]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix='.ledger-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump([account.to_dict() for account in accounts], fh, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get_by_id(self, user_id: UserId) -> Optional[Account]:
        key = coerce_user_id(user_id)
        if key is None:
            return None
        with self._lock:
            return next((a for a in self._read() if a.id == key), None)

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            return next((a for a in self._read() if a.email == email), None)

    def add(self, account: Account) -> Account:
        with self._lock:
            accounts = self._read()
            if any(a.email == account.email for a in accounts):
                raise UserAlreadyExistsError("User already exists.")
            accounts.append(account.copy())
            self._write(accounts)
            logger.debug("Stored account %s in %s", account.id, self.path)
        return account.copy()

    def save(self, account: Account) -> Account:
        with self._lock:
            accounts = self._read()
            for index, existing in enumerate(accounts):
                if existing.id == account.id:
                    accounts[index] = account.copy()
                    break
            else:
                raise UserNotFoundError("User not found.")
            self._write(accounts)
        return account.copy()

    def list_all(self) -> List[Account]:
        with self._lock:
            return self._read()

    @contextmanager
    def lock(self, user_id: UserId) -> Iterator[None]:
        with self._lock:
            yield
