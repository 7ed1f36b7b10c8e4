from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from rest_framework.test import APIClient

from apps.accounts.services import register_user
from apps.ledger.domain import CosmeticPurchase
from apps.ledger.stores import DjangoLedgerStore, InMemoryLedgerStore, JsonFileLedgerStore


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture(params=['memory', 'file', 'django'])
def store(request, tmp_path):
    """Every ledger store; ledger rules must hold on all of them."""
    if request.param == 'memory':
        return InMemoryLedgerStore()
    if request.param == 'file':
        return JsonFileLedgerStore(tmp_path / 'ledger.json')
    request.getfixturevalue('db')
    return DjangoLedgerStore()


@pytest.fixture
def db_store(db):
    """The database store the API uses under test settings."""
    return DjangoLedgerStore()


@pytest.fixture
def account(store):
    """A fresh account holding the starting balance."""
    return register_user(
        store=store,
        email='buyer@example.com',
        name='Buyer',
        password='BuyerPass123!',
    )


@pytest.fixture
def db_account(db_store):
    return register_user(
        store=db_store,
        email='buyer@example.com',
        name='Buyer',
        password='BuyerPass123!',
    )


@pytest.fixture
def clock():
    """Strictly increasing timestamps, one second apart."""
    start = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)
    ticks = iter(range(10_000))

    def now():
        return start + timedelta(seconds=next(ticks))

    return now


@pytest.fixture
def outfit():
    return CosmeticPurchase(id='CID_001', price=1500, name='Renegade Raider', image='https://img/1.png')


@pytest.fixture
def emote():
    return CosmeticPurchase(id='EID_001', price=500, name='Floss')


@pytest.fixture
def bundle():
    """A bundle whose own id is also one of its items."""
    return CosmeticPurchase(
        id='BUNDLE_A',
        price=2000,
        name='Starter Set',
        bundle_ids=['BUNDLE_A', 'CID_100', 'BID_100'],
    )
