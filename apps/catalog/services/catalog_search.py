"""Catalog merging, search and filtering service."""

from __future__ import annotations

from datetime import date, datetime, time, timezone as dt_timezone
from typing import Iterable, List, Optional

from django.utils import timezone

from ..domain import Cosmetic
from .exceptions import CosmeticNotFoundError


def merge_catalog(*, shop: List[Cosmetic], new: List[Cosmetic]) -> List[Cosmetic]:
    """
    Combine the shop and the new-cosmetics list into one listing.

    Each id appears once. Shop data wins for price, sale and bundle fields;
    ``is_new`` comes from the new list. Shop items are listed first.

    Args:
        shop: Normalized shop entries
        new: Normalized new cosmetics

    Returns:
        Merged list, shop items first
    """
    new_ids = {item.id for item in new}
    merged = {}

    for item in shop:
        if item.id not in merged:
            merged[item.id] = item.with_changes(is_new=item.id in new_ids)

    for item in new:
        if item.id not in merged:
            merged[item.id] = item

    return list(merged.values())


def _as_datetime(value, *, end_of_day: bool = False) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        result = value
    else:
        result = datetime.combine(value, time.max if end_of_day else time.min)
    if timezone.is_naive(result):
        result = timezone.make_aware(result, dt_timezone.utc)
    return result


def filter_cosmetics(
    items: Iterable[Cosmetic],
    *,
    search: Optional[str] = None,
    type: Optional[str] = None,
    rarity: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    is_new: Optional[bool] = None,
    on_sale: Optional[bool] = None,
    promotional: Optional[bool] = None,
) -> List[Cosmetic]:
    """
    Filter cosmetics.

    Args:
        items: Cosmetics to filter
        search: Case-insensitive substring of the name
        type: Type value (e.g. ``outfit``)
        rarity: Rarity value (e.g. ``legendary``)
        date_from: Added on or after this day
        date_to: Added on or before this day (whole day included)
        is_new: Only new (True) or only not-new (False)
        on_sale: Only items currently in the shop
        promotional: Only discounted items

    Returns:
        Filtered list in input order
    """
    needle = search.strip().lower() if search else ''
    start = _as_datetime(date_from)
    end = _as_datetime(date_to, end_of_day=True)

    result = []
    for item in items:
        if needle and needle not in item.name.lower():
            continue
        if type and item.type.value != type:
            continue
        if rarity and item.rarity.value != rarity:
            continue
        # Date filters exclude items without an added date
        if start and (item.added is None or item.added < start):
            continue
        if end and (item.added is None or item.added > end):
            continue
        if is_new is not None and item.is_new != is_new:
            continue
        if on_sale is not None and item.is_on_sale != on_sale:
            continue
        if promotional is not None and item.is_promotional != promotional:
            continue
        result.append(item)

    return result


def get_facets(items: Iterable[Cosmetic]) -> dict:
    """
    Distinct types and rarities available for filtering.

    Returns:
        ``{'types': [...], 'rarities': [...]}``; types sorted by display
        value, rarities in first-seen order
    """
    types = {}
    rarities = {}
    for item in items:
        types.setdefault(item.type.value, item.type)
        rarities.setdefault(item.rarity.value, item.rarity)

    return {
        'types': sorted(types.values(), key=lambda label: label.display_value.lower()),
        'rarities': list(rarities.values()),
    }


def find_cosmetic(*, cosmetic_id: str, sources: Iterable[List[Cosmetic]]) -> Cosmetic:
    """
    Find a cosmetic by id in the first list that has it.

    Raises:
        CosmeticNotFoundError: If no list contains the id
    """
    for items in sources:
        for item in items:
            if item.id == cosmetic_id:
                return item
    raise CosmeticNotFoundError(f"Cosmetic '{cosmetic_id}' not found.")


def get_owned_cosmetics(*, inventory: Iterable[str], catalog: Iterable[Cosmetic]) -> List[Cosmetic]:
    """Catalog entries for the ids in ``inventory``, in inventory order. Unknown ids are skipped."""
    by_id = {}
    for item in catalog:
        by_id.setdefault(item.id, item)
    return [by_id[cosmetic_id] for cosmetic_id in inventory if cosmetic_id in by_id]
