import uuid

import pytest
from django.core.exceptions import ImproperlyConfigured

from apps.accounts.services import register_user, UserAlreadyExistsError, UserNotFoundError
from apps.ledger.domain import Account, CosmeticPurchase
from apps.ledger.services import buy
from apps.ledger.stores import JsonFileLedgerStore, coerce_user_id
from apps.ledger.stores import _build_store


class TestStoreContract:
    """Behaviour every LedgerStore must share."""

    def test_get_by_id_returns_detached_copy(self, store, account):
        copy = store.get_by_id(account.id)
        copy.inventory.append('CID_X')
        copy.balance = 1

        fresh = store.get_by_id(account.id)
        assert fresh.inventory == []
        assert fresh.balance == account.balance

    def test_get_by_email(self, store, account):
        assert store.get_by_email('buyer@example.com').id == account.id
        assert store.get_by_email('nobody@example.com') is None

    def test_get_by_invalid_id(self, store, account):
        assert store.get_by_id('not-a-uuid') is None
        assert store.get_by_id(uuid.uuid4()) is None

    def test_add_duplicate_email(self, store, account):
        duplicate = Account(
            id=uuid.uuid4(),
            email=account.email,
            name='Copy',
            password='x',
            balance=0,
        )

        with pytest.raises(UserAlreadyExistsError):
            store.add(duplicate)

    def test_save_unknown_account(self, store):
        ghost = Account(id=uuid.uuid4(), email='ghost@example.com', name='', password='', balance=0)

        with pytest.raises(UserNotFoundError):
            store.save(ghost)

    def test_list_all(self, store, account):
        register_user(store=store, email='second@example.com', name='Second', password='secret123')

        emails = [a.email for a in store.list_all()]
        assert sorted(emails) == ['buyer@example.com', 'second@example.com']

    def test_history_order_survives_storage(self, store, account, clock):
        for index in range(3):
            buy(store=store, user_id=account.id, item=CosmeticPurchase(id=f'CID_{index}', price=10), now=clock)

        history = store.get_by_id(account.id).history
        assert [tx.cosmetic_id for tx in history] == ['CID_0', 'CID_1', 'CID_2']


class TestJsonFileStore:

    def test_state_survives_new_instance(self, tmp_path):
        path = tmp_path / 'ledger.json'
        first = JsonFileLedgerStore(path)
        account = register_user(store=first, email='a@example.com', name='A', password='secret123')
        buy(store=first, user_id=account.id, item=CosmeticPurchase(id='CID_1', price=100))

        reopened = JsonFileLedgerStore(path).get_by_id(account.id)

        assert reopened.inventory == ['CID_1']
        assert reopened.history[0].amount == -100

    def test_missing_or_empty_file_is_empty_store(self, tmp_path):
        path = tmp_path / 'ledger.json'
        assert JsonFileLedgerStore(path).list_all() == []

        path.write_text('')
        assert JsonFileLedgerStore(path).list_all() == []


class TestStoreFactory:

    def test_unknown_backend(self):
        with pytest.raises(ImproperlyConfigured):
            _build_store('redis', 'ledger.json')

    def test_memory_backend_is_shared(self):
        assert _build_store('memory', '') is _build_store('memory', '')


class TestCoerceUserId:

    def test_accepts_uuid_and_string(self):
        value = uuid.uuid4()
        assert coerce_user_id(value) == value
        assert coerce_user_id(str(value)) == value

    def test_rejects_garbage(self):
        assert coerce_user_id('abc') is None
        assert coerce_user_id(None) is None
