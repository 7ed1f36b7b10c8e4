"""
fortnite-api.com client.

Fetches the three catalog lists and caches each normalized list in the
Django cache for ``CATALOG_CACHE_TTL`` seconds. Failures are logged and
return an empty list; they are never cached.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from django.conf import settings
from django.core.cache import cache

from .domain import Cosmetic
from .services.normalization import normalize_many

logger = logging.getLogger(__name__)

FetchJson = Callable[[str], Any]


class CatalogClient:
    """
    Read-only client for the cosmetics API.

    ``fetch_json`` takes an API path and returns decoded JSON; it defaults
    to an HTTP GET against ``base_url`` and can be replaced in tests.
    """

    SHOP_PATH = '/shop'
    NEW_PATH = '/cosmetics/new'
    ALL_PATH = '/cosmetics/br'
    CACHE_PREFIX = 'catalog'

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        cache_ttl: Optional[int] = None,
        language: Optional[str] = None,
        fetch_json: Optional[FetchJson] = None,
    ):
        self.base_url = (base_url or settings.CATALOG_API_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.CATALOG_TIMEOUT
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.CATALOG_CACHE_TTL
        self.language = language or settings.CATALOG_LANGUAGE
        self._fetch_json = fetch_json or self._http_get_json

    def _http_get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}?{urlencode({'language': self.language})}"
        request = Request(url, headers={
            'Accept': 'application/json',
            'User-Agent': 'cosmetic-shop/1.0',
        })
        with urlopen(request, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def _cached(self, key: str, loader: Callable[[], Optional[List[Cosmetic]]]) -> List[Cosmetic]:
        cache_key = f"{self.CACHE_PREFIX}:{key}"
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        items = loader()
        if items is None:
            return []

        cache.set(cache_key, items, self.cache_ttl)
        return items

    def _get_data(self, path: str) -> Any:
        """Return the ``data`` member of the API envelope, or None on any failure."""
        try:
            payload = self._fetch_json(path)
        except (HTTPError, URLError, OSError, ValueError) as e:
            logger.error("Failed to fetch %s%s: %s", self.base_url, path, e)
            return None

        if not isinstance(payload, dict) or not payload.get('data'):
            logger.error("Unexpected response from %s%s", self.base_url, path)
            return None
        return payload['data']

    def get_shop(self) -> List[Cosmetic]:
        """Current item shop entries (bundles carry ``bundle_ids``)."""
        def load():
            data = self._get_data(self.SHOP_PATH)
            if not isinstance(data, dict):
                return None

            entries = []
            for section in ('featured', 'daily'):
                section_entries = (data.get(section) or {}).get('entries')
                if isinstance(section_entries, list):
                    entries.extend(section_entries)
            if not entries and isinstance(data.get('entries'), list):
                entries = data['entries']

            return normalize_many(entries)

        return self._cached('shop', load)

    def get_new_cosmetics(self) -> List[Cosmetic]:
        """Recently added cosmetics, flagged ``is_new``."""
        def load():
            data = self._get_data(self.NEW_PATH)
            if not isinstance(data, dict):
                return None

            items = data.get('items')
            if isinstance(items, dict):
                items = items.get('br')
            if not isinstance(items, list):
                items = []

            return normalize_many(items, is_new=True)

        return self._cached('new', load)

    def get_all_cosmetics(self) -> List[Cosmetic]:
        """Every Battle Royale cosmetic."""
        def load():
            data = self._get_data(self.ALL_PATH)
            if not isinstance(data, list):
                return None
            return normalize_many(data)

        return self._cached('all', load)


def get_catalog_client() -> CatalogClient:
    """Client configured from settings."""
    return CatalogClient()
