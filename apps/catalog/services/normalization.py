"""Turn raw fortnite-api.com items and shop entries into Cosmetic records."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from django.utils.dateparse import parse_datetime

from ..domain import Cosmetic, CosmeticLabel

# Price used when the API does not give one (shop prices only exist for shop entries)
DEFAULT_PRICE = 1200
UNKNOWN_NAME = 'Unknown item'
NO_DESCRIPTION = 'No description available.'


def _label(raw: Any, default_value: str, default_display: str) -> CosmeticLabel:
    if not isinstance(raw, dict) or not raw.get('value'):
        return CosmeticLabel(value=default_value, display_value=default_display)
    return CosmeticLabel(
        value=raw['value'],
        display_value=raw.get('displayValue') or raw['value'],
    )


def _images(raw: Any) -> dict:
    if not isinstance(raw, dict):
        return {}
    return {k: v for k, v in raw.items() if isinstance(v, str)}


def _added(raw: Any):
    if not isinstance(raw, str):
        return None
    try:
        return parse_datetime(raw)
    except ValueError:
        # Well formed but not a real date
        return None


def _shop_items(raw: dict) -> Optional[List[dict]]:
    """Items granted by a shop entry, or None when ``raw`` is a plain cosmetic."""
    for key in ('items', 'brItems'):
        items = raw.get(key)
        if isinstance(items, list):
            return [item for item in items if isinstance(item, dict)]
    return None


def normalize_cosmetic(raw: Any) -> Optional[Cosmetic]:
    """
    Normalize a cosmetic or a shop entry.

    Shop entries describe their first item; when they grant more than one
    item, every granted id goes into ``bundle_ids``. Prices fall back to
    DEFAULT_PRICE and ``is_promotional`` means final price below regular.

    Returns:
        Cosmetic, or None for entries without a usable id
    """
    if not isinstance(raw, dict):
        return None

    shop_items = _shop_items(raw)
    if shop_items is not None:
        core = shop_items[0] if shop_items else None
    else:
        core = raw

    if not core or not core.get('id'):
        return None

    bundle_ids = []
    if shop_items is not None and len(shop_items) > 1:
        bundle_ids = [item['id'] for item in shop_items if item.get('id')]

    final_price = raw.get('finalPrice') or DEFAULT_PRICE
    regular_price = raw.get('regularPrice') or final_price
    bundle = raw.get('bundle') if isinstance(raw.get('bundle'), dict) else {}

    return Cosmetic(
        id=core['id'],
        name=raw.get('bundleName') or bundle.get('name') or core.get('name') or UNKNOWN_NAME,
        description=core.get('description') or NO_DESCRIPTION,
        type=_label(core.get('type'), 'unknown', 'Unknown'),
        rarity=_label(core.get('rarity'), 'common', 'Common'),
        images=_images(core.get('images')),
        added=_added(core.get('added')),
        price=int(final_price),
        regular_price=int(regular_price),
        is_on_sale=bool(raw.get('finalPrice')),
        is_promotional=final_price < regular_price,
        bundle_ids=bundle_ids,
    )


def normalize_many(raw_items: Iterable[Any], **overrides) -> List[Cosmetic]:
    """Normalize a list, dropping invalid entries and applying ``overrides`` to each."""
    cosmetics = []
    for raw in raw_items:
        cosmetic = normalize_cosmetic(raw)
        if cosmetic is None:
            continue
        cosmetics.append(cosmetic.with_changes(**overrides) if overrides else cosmetic)
    return cosmetics
