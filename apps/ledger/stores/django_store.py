"""Relational ledger store backed by the ``accounts.User`` and ``ledger.Transaction`` tables."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from django.db import IntegrityError, transaction

from apps.accounts.models import User
from apps.accounts.services.exceptions import UserAlreadyExistsError, UserNotFoundError

from ..domain import Account, TransactionRecord
from ..models import Transaction
from .base import LedgerStore, UserId, coerce_user_id


def _to_record(tx: Transaction) -> TransactionRecord:
    return TransactionRecord(
        id=tx.id,
        cosmetic_id=tx.cosmetic_id,
        cosmetic_name=tx.cosmetic_name,
        cosmetic_image=tx.cosmetic_image,
        amount=tx.amount,
        type=tx.type,
        date=tx.date,
        related_items=list(tx.related_items or []),
    )


def _to_account(user: User) -> Account:
    return Account(
        id=user.id,
        email=user.email,
        name=user.name,
        password=user.password,
        balance=user.balance,
        inventory=list(user.inventory or []),
        history=[_to_record(tx) for tx in user.history.all()],
        created_at=user.created_at,
    )


class DjangoLedgerStore(LedgerStore):
    """
    ORM-backed store.

    ``lock`` opens an atomic block and takes a row lock on the user, so a
    buy or refund either commits completely or not at all.
    """

    def _queryset(self):
        return User.objects.prefetch_related('history')

    def get_by_id(self, user_id: UserId) -> Optional[Account]:
        key = coerce_user_id(user_id)
        if key is None:
            return None
        user = self._queryset().filter(id=key).first()
        return _to_account(user) if user else None

    def get_by_email(self, email: str) -> Optional[Account]:
        user = self._queryset().filter(email=email).first()
        return _to_account(user) if user else None

    def add(self, account: Account) -> Account:
        try:
            with transaction.atomic():
                user = User.objects.create(
                    id=account.id,
                    email=account.email,
                    name=account.name,
                    password=account.password,
                    balance=account.balance,
                    inventory=list(account.inventory),
                )
        except IntegrityError:
            raise UserAlreadyExistsError("User already exists.")
        return _to_account(user)

    @transaction.atomic
    def save(self, account: Account) -> Account:
        updated = User.objects.filter(id=account.id).update(
            balance=account.balance,
            inventory=list(account.inventory),
        )
        if not updated:
            raise UserNotFoundError("User not found.")

        # History is append-only: insert whatever the database doesn't have yet
        stored = Transaction.objects.filter(user_id=account.id).count()
        Transaction.objects.bulk_create([
            Transaction(
                id=record.id,
                user_id=account.id,
                position=position,
                cosmetic_id=record.cosmetic_id,
                cosmetic_name=record.cosmetic_name,
                cosmetic_image=record.cosmetic_image,
                amount=record.amount,
                type=record.type,
                date=record.date,
                related_items=list(record.related_items),
            )
            for position, record in enumerate(account.history)
            if position >= stored
        ])

        return self.get_by_id(account.id)

    def list_all(self) -> List[Account]:
        return [_to_account(user) for user in self._queryset().order_by('created_at')]

    @contextmanager
    def lock(self, user_id: UserId) -> Iterator[None]:
        key = coerce_user_id(user_id)
        with transaction.atomic():
            if key is not None:
                # Evaluate to actually take the row lock
                list(User.objects.select_for_update().filter(id=key).values_list('id', flat=True))
            yield
