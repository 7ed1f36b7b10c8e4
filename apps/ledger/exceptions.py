"""
Domain exceptions for the ledger app.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── AlreadyOwnedError
    ├── NotOwnedError
    ├── InsufficientBalanceError
    └── InvalidPriceError

Unknown users raise ``apps.accounts.services.exceptions.UserNotFoundError``,
re-exported here so views can catch everything from one module.

A refund with no matching purchase is not an error: it falls back to the
caller's price and still removes the item.
"""

from apps.accounts.services.exceptions import UserNotFoundError


class LedgerServiceError(Exception):
    """Base exception for ledger service errors."""
    pass


class AlreadyOwnedError(LedgerServiceError):
    """The user already has this item in their inventory."""
    pass


class NotOwnedError(LedgerServiceError):
    """The user tried to refund an item they do not hold."""
    pass


class InsufficientBalanceError(LedgerServiceError):
    """The item costs more than the user's balance."""
    pass


class InvalidPriceError(LedgerServiceError):
    """The purchase price is negative."""
    pass


__all__ = [
    'LedgerServiceError',
    'AlreadyOwnedError',
    'NotOwnedError',
    'InsufficientBalanceError',
    'InvalidPriceError',
    'UserNotFoundError',
]
