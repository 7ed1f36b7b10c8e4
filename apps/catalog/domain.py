"""Catalog records as normalized from fortnite-api.com payloads."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class CosmeticLabel:
    """A type or rarity: machine value plus display text."""

    value: str
    display_value: str


@dataclass(frozen=True)
class Cosmetic:
    id: str
    name: str
    description: str
    type: CosmeticLabel
    rarity: CosmeticLabel
    images: Dict[str, str] = field(default_factory=dict)
    added: Optional[datetime] = None
    price: int = 0
    regular_price: int = 0
    is_new: bool = False
    is_on_sale: bool = False
    is_promotional: bool = False
    bundle_ids: List[str] = field(default_factory=list)

    @property
    def image(self) -> str:
        """Best available image URL."""
        for key in ('featured', 'icon', 'smallIcon'):
            if self.images.get(key):
                return self.images[key]
        return ''

    def with_changes(self, **changes) -> Cosmetic:
        return replace(self, **changes)
