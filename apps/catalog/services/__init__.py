"""Catalog services."""

from .catalog_search import (
    filter_cosmetics,
    find_cosmetic,
    get_facets,
    get_owned_cosmetics,
    merge_catalog,
)
from .exceptions import CatalogServiceError, CosmeticNotFoundError
from .normalization import DEFAULT_PRICE, normalize_cosmetic, normalize_many

__all__ = [
    'merge_catalog',
    'filter_cosmetics',
    'get_facets',
    'find_cosmetic',
    'get_owned_cosmetics',
    'normalize_cosmetic',
    'normalize_many',
    'DEFAULT_PRICE',
    'CatalogServiceError',
    'CosmeticNotFoundError',
]
