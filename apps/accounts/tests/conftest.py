import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.services import register_user
from apps.ledger.stores import DjangoLedgerStore, InMemoryLedgerStore


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def store(db):
    """The database store the API uses under test settings."""
    return DjangoLedgerStore()


@pytest.fixture
def memory_store():
    """A fresh in-memory store."""
    return InMemoryLedgerStore()


@pytest.fixture
def user(store):
    """Create and return a registered test user."""
    return register_user(
        store=store,
        email='testuser@example.com',
        name='Test User',
        password='TestPass123!',
    )


@pytest.fixture
def other_user(store):
    """Create and return another registered user."""
    return register_user(
        store=store,
        email='otheruser@example.com',
        name='Other User',
        password='OtherPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
