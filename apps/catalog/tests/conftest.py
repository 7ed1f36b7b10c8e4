import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.catalog.client import CatalogClient


def make_item(cosmetic_id, name, type_value='outfit', rarity='rare', added='2024-03-01T10:00:00Z', **extra):
    item = {
        'id': cosmetic_id,
        'name': name,
        'description': f'{name} description',
        'type': {'value': type_value, 'displayValue': type_value.title()},
        'rarity': {'value': rarity, 'displayValue': rarity.title()},
        'images': {'icon': f'https://img/{cosmetic_id}/icon.png', 'featured': None},
        'added': added,
    }
    item.update(extra)
    return item


SHOP_PAYLOAD = {
    'status': 200,
    'data': {
        'featured': {
            'entries': [
                {
                    'regularPrice': 2000,
                    'finalPrice': 1500,
                    'bundle': {'name': 'Galaxy Set'},
                    'items': [
                        make_item('CID_GALAXY', 'Galaxy', rarity='legendary'),
                        make_item('BID_GALAXY', 'Galaxy Pack', type_value='backpack', rarity='legendary'),
                    ],
                },
            ],
        },
        'daily': {
            'entries': [
                {
                    'regularPrice': 800,
                    'finalPrice': 800,
                    'items': [make_item('EID_FLOSS', 'Floss', type_value='emote', rarity='rare')],
                },
            ],
        },
    },
}

NEW_PAYLOAD = {
    'status': 200,
    'data': {
        'items': {
            'br': [
                make_item('EID_FLOSS', 'Floss', type_value='emote', rarity='rare', added='2024-05-20T08:00:00Z'),
                make_item('CID_NEW', 'Newcomer', rarity='epic', added='2024-05-21T08:00:00Z'),
            ],
        },
    },
}

ALL_PAYLOAD = {
    'status': 200,
    'data': [
        make_item('CID_OLD', 'Renegade Raider', rarity='rare', added='2018-01-01T00:00:00Z'),
        make_item('CID_GALAXY', 'Galaxy', rarity='legendary'),
    ],
}

PAYLOADS = {
    '/shop': SHOP_PAYLOAD,
    '/cosmetics/new': NEW_PAYLOAD,
    '/cosmetics/br': ALL_PAYLOAD,
}


class FakeFetch:
    """Serves canned payloads by path and counts calls."""

    def __init__(self, payloads=None, error=None):
        self.payloads = PAYLOADS if payloads is None else payloads
        self.error = error
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.payloads[path]


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def fake_fetch():
    return FakeFetch()


@pytest.fixture
def client_factory():
    def build(fetch):
        return CatalogClient(base_url='https://api.test/v2', timeout=1, cache_ttl=60, fetch_json=fetch)
    return build


@pytest.fixture
def catalog_client(client_factory, fake_fetch):
    return client_factory(fake_fetch)


@pytest.fixture
def api_client(monkeypatch, catalog_client):
    """API client whose catalog views use the canned payloads."""
    monkeypatch.setattr('apps.catalog.views.get_catalog_client', lambda: catalog_client)
    return APIClient()
