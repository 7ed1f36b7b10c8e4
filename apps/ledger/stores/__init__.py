"""
Ledger stores.

Every service takes a ``store`` argument; views and commands use
``get_ledger_store()``, which builds the backend named by the
``LEDGER_STORE`` setting once per process.
"""

from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .base import LedgerStore, coerce_user_id
from .memory import InMemoryLedgerStore
from .json_file import JsonFileLedgerStore
from .django_store import DjangoLedgerStore


@lru_cache(maxsize=None)
def _build_store(backend: str, file_path: str) -> LedgerStore:
    if backend == 'django':
        return DjangoLedgerStore()
    if backend == 'memory':
        return InMemoryLedgerStore()
    if backend == 'file':
        return JsonFileLedgerStore(file_path)
    raise ImproperlyConfigured(
        f"Unknown LEDGER_STORE '{backend}'. Use 'django', 'memory' or 'file'."
    )


def get_ledger_store() -> LedgerStore:
    """Return the process-wide store selected in settings."""
    return _build_store(
        getattr(settings, 'LEDGER_STORE', 'django'),
        str(getattr(settings, 'LEDGER_FILE_PATH', 'ledger.json')),
    )


__all__ = [
    'LedgerStore',
    'InMemoryLedgerStore',
    'JsonFileLedgerStore',
    'DjangoLedgerStore',
    'coerce_user_id',
    'get_ledger_store',
]
