"""
Ledger Services Module
======================

Balance, inventory and history operations for shop users.

Functions:
    buy: Purchase a cosmetic (or bundle) with V-Bucks.
    refund: Return an owned cosmetic using its purchase receipt.
    replay_history: Rebuild balance and inventory from history alone.
    verify_account: Check stored state against the replay.

Every function takes the store explicitly, so the same rules run on the
database, in memory or on a JSON file.

Example:
    Buying a bundle and refunding one of its items::

        from apps.ledger.domain import CosmeticPurchase
        from apps.ledger.services import buy, refund
        from apps.ledger.stores import get_ledger_store

        store = get_ledger_store()
        item = CosmeticPurchase(id='A', price=500, name='Set', bundle_ids=['B', 'C'])

        account = buy(store=store, user_id=user.id, item=item)
        # balance -500, inventory gains A, B and C

        account = refund(store=store, user_id=user.id, cosmetic_id='B')
        # the whole bundle goes back: A, B and C removed, +500
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from .domain import Account, CosmeticPurchase, TransactionRecord
from .exceptions import (
    AlreadyOwnedError,
    InsufficientBalanceError,
    InvalidPriceError,
    NotOwnedError,
    UserNotFoundError,
)
from .models import TransactionType
from .stores.base import LedgerStore, UserId

logger = logging.getLogger(__name__)

RECOVERED_ITEM_NAME = 'Refund (recovered item)'

Clock = Callable[[], datetime]


def _load(store: LedgerStore, user_id: UserId) -> Account:
    account = store.get_by_id(user_id)
    if account is None:
        raise UserNotFoundError("User not found.")
    return account


def buy(
    *,
    store: LedgerStore,
    user_id: UserId,
    item: CosmeticPurchase,
    now: Clock = timezone.now,
) -> Account:
    """
    Buy a cosmetic for a user.

    A bundle grants ``item.id`` plus every id in ``item.bundle_ids``.
    Items the user already holds are skipped, so ``related_items`` on the
    new PURCHASE entry lists exactly what this purchase added.

    Args:
        store: Ledger store
        user_id: Buyer's id
        item: Cosmetic descriptor (id, price, name, image, bundle_ids)
        now: Clock for the transaction date

    Returns:
        Updated Account snapshot

    Raises:
        UserNotFoundError: If the user does not exist
        AlreadyOwnedError: If the user already owns ``item.id``
        InvalidPriceError: If price is negative
        InsufficientBalanceError: If balance < price

    Note:
        Runs under ``store.lock``; on any error nothing is persisted.
    """
    price = int(item.price)
    if price < 0:
        raise InvalidPriceError("Price must not be negative.")

    with store.lock(user_id):
        account = _load(store, user_id)

        if account.owns(item.id):
            raise AlreadyOwnedError("You already own this item.")

        if account.balance < price:
            raise InsufficientBalanceError("Insufficient balance.")

        new_items: List[str] = []
        for cosmetic_id in [item.id, *(item.bundle_ids or ())]:
            if cosmetic_id not in account.inventory and cosmetic_id not in new_items:
                new_items.append(cosmetic_id)

        account.history.append(TransactionRecord(
            id=uuid.uuid4(),
            cosmetic_id=item.id,
            cosmetic_name=item.name,
            cosmetic_image=item.image,
            amount=-price,
            type=TransactionType.PURCHASE,
            date=now(),
            related_items=new_items,
        ))
        account.balance -= price
        account.inventory.extend(new_items)

        account = store.save(account)

    logger.info(
        "User %s bought %s for %s V-Bucks (granted %s)",
        account.id, item.id, price, new_items,
    )
    return account


def find_purchase(account: Account, cosmetic_id: str) -> Optional[TransactionRecord]:
    """
    Most recent PURCHASE that granted ``cosmetic_id``, directly or in a bundle.

    Scans newest first so a re-purchase after a refund wins over the
    older receipt.
    """
    for record in reversed(account.history):
        if record.is_purchase and record.grants(cosmetic_id):
            return record
    return None


def refund(
    *,
    store: LedgerStore,
    user_id: UserId,
    cosmetic_id: str,
    fallback_price: Optional[int] = 0,
    now: Clock = timezone.now,
) -> Account:
    """
    Refund an owned cosmetic.

    The receipt is the latest purchase that granted the item. Its full
    amount is credited and everything it granted is removed, so refunding
    one piece of a bundle returns the whole bundle.

    Without a receipt (legacy or inconsistent data) the item is still
    removed and ``fallback_price`` is credited (0 when not given). This
    path logs a warning and never raises.

    Args:
        store: Ledger store
        user_id: Owner's id
        cosmetic_id: Item to refund
        fallback_price: Credit used only when no receipt exists
        now: Clock for the transaction date

    Returns:
        Updated Account snapshot

    Raises:
        UserNotFoundError: If the user does not exist
        NotOwnedError: If the item is not in the user's inventory
    """
    with store.lock(user_id):
        account = _load(store, user_id)

        if not account.owns(cosmetic_id):
            raise NotOwnedError("You do not own this item.")

        receipt = find_purchase(account, cosmetic_id)

        if receipt is not None:
            refund_amount = abs(receipt.amount)
            items_to_remove = list(receipt.related_items) or [cosmetic_id]
            if cosmetic_id not in items_to_remove:
                items_to_remove.append(cosmetic_id)
            cosmetic_name = receipt.cosmetic_name
            cosmetic_image = receipt.cosmetic_image
        else:
            logger.warning(
                "No purchase found for %s in history of user %s; refunding %s as recovered item",
                cosmetic_id, account.id, fallback_price or 0,
            )
            refund_amount = abs(int(fallback_price or 0))
            items_to_remove = [cosmetic_id]
            cosmetic_name = RECOVERED_ITEM_NAME
            cosmetic_image = ''

        # Only what is actually held can be removed
        items_to_remove = [i for i in items_to_remove if i in account.inventory]

        account.history.append(TransactionRecord(
            id=uuid.uuid4(),
            cosmetic_id=cosmetic_id,
            cosmetic_name=cosmetic_name,
            cosmetic_image=cosmetic_image,
            amount=refund_amount,
            type=TransactionType.REFUND,
            date=now(),
            related_items=items_to_remove,
        ))
        account.balance += refund_amount
        account.inventory = [i for i in account.inventory if i not in items_to_remove]

        account = store.save(account)

    logger.info(
        "User %s refunded %s for %s V-Bucks (removed %s)",
        account.id, cosmetic_id, refund_amount, items_to_remove,
    )
    return account


def replay_history(
    account: Account,
    initial_balance: Optional[int] = None,
) -> Tuple[int, List[str]]:
    """
    Rebuild (balance, inventory) from the starting grant and history.

    PURCHASE entries add their related items, REFUND entries remove
    theirs; amounts are summed onto the grant.
    """
    if initial_balance is None:
        initial_balance = settings.INITIAL_BALANCE

    balance = initial_balance
    inventory: List[str] = []
    for record in account.history:
        balance += record.amount
        if record.is_purchase:
            inventory.extend(i for i in record.related_items if i not in inventory)
        else:
            inventory = [i for i in inventory if i not in record.related_items]
    return balance, inventory


def verify_account(account: Account, initial_balance: Optional[int] = None) -> bool:
    """True when replaying history reproduces the stored balance and inventory."""
    balance, inventory = replay_history(account, initial_balance)
    return balance == account.balance and set(inventory) == set(account.inventory)
