"""
Ledger domain records.

Plain dataclasses shared by every ledger store. Services work on an
``Account`` snapshot and hand it back to the store to persist, so the same
buy/refund logic runs against the database, memory or a JSON file.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import TransactionType


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable history entry. Amount is negative for purchases."""

    id: uuid.UUID
    cosmetic_id: str
    cosmetic_name: str
    cosmetic_image: str
    amount: int
    type: TransactionType
    date: datetime
    related_items: List[str] = field(default_factory=list)

    @property
    def is_purchase(self) -> bool:
        return self.type == TransactionType.PURCHASE

    def grants(self, cosmetic_id: str) -> bool:
        """True if this purchase was for ``cosmetic_id`` or included it in a bundle."""
        return self.cosmetic_id == cosmetic_id or cosmetic_id in self.related_items

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'cosmetic_id': self.cosmetic_id,
            'cosmetic_name': self.cosmetic_name,
            'cosmetic_image': self.cosmetic_image,
            'amount': self.amount,
            'type': str(self.type),
            'date': self.date.isoformat(),
            'related_items': list(self.related_items),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TransactionRecord:
        return cls(
            id=uuid.UUID(str(data['id'])),
            cosmetic_id=data['cosmetic_id'],
            cosmetic_name=data.get('cosmetic_name', ''),
            cosmetic_image=data.get('cosmetic_image', ''),
            amount=int(data['amount']),
            type=TransactionType(data['type']),
            date=datetime.fromisoformat(data['date']),
            related_items=list(data.get('related_items') or []),
        )


@dataclass
class Account:
    """
    Snapshot of a user's ledger state.

    ``password`` always holds a salted hash. ``inventory`` keeps purchase
    order and never contains duplicates.
    """

    id: uuid.UUID
    email: str
    name: str
    password: str
    balance: int
    inventory: List[str] = field(default_factory=list)
    history: List[TransactionRecord] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        # Accounts are never deactivated; token issuing checks this
        return True

    def owns(self, cosmetic_id: str) -> bool:
        return cosmetic_id in self.inventory

    def copy(self) -> Account:
        """Detached copy; records are frozen so the lists are all that need copying."""
        return Account(
            id=self.id,
            email=self.email,
            name=self.name,
            password=self.password,
            balance=self.balance,
            inventory=list(self.inventory),
            history=list(self.history),
            created_at=self.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'email': self.email,
            'name': self.name,
            'password': self.password,
            'balance': self.balance,
            'inventory': list(self.inventory),
            'history': [tx.to_dict() for tx in self.history],
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Account:
        created_at = data.get('created_at')
        return cls(
            id=uuid.UUID(str(data['id'])),
            email=data['email'],
            name=data.get('name', ''),
            password=data.get('password', ''),
            balance=int(data.get('balance', 0)),
            inventory=list(data.get('inventory') or []),
            history=[TransactionRecord.from_dict(tx) for tx in data.get('history') or []],
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


@dataclass(frozen=True)
class CosmeticPurchase:
    """What the caller wants to buy: one catalog item, optionally a bundle."""

    id: str
    price: int
    name: str = ''
    image: str = ''
    bundle_ids: Optional[List[str]] = field(default_factory=list)
