import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from io import StringIO

from apps.ledger.domain import CosmeticPurchase
from apps.ledger.services import buy


@pytest.mark.django_db
class TestVerifyLedgers:
    """Tests for the verify_ledgers management command."""

    def test_no_accounts(self):
        out = StringIO()
        call_command('verify_ledgers', stdout=out)

        assert 'No accounts to check.' in out.getvalue()

    def test_consistent_accounts(self, db_store, db_account):
        buy(store=db_store, user_id=db_account.id, item=CosmeticPurchase(id='CID_001', price=1500))

        out = StringIO()
        call_command('verify_ledgers', stdout=out)

        assert 'All 1 account(s) match their history.' in out.getvalue()

    def test_reports_mismatch(self, db_store, db_account):
        db_account.inventory.append('LEGACY_1')
        db_account.balance = 123
        db_store.save(db_account)

        out = StringIO()
        call_command('verify_ledgers', stdout=out)
        output = out.getvalue()

        assert db_account.email in output
        assert 'stored 123' in output
        assert 'not explained by history: LEGACY_1' in output
        assert '1 of 1 account(s) do not match' in output

    def test_fail_on_mismatch(self, db_store, db_account):
        db_account.balance = 123
        db_store.save(db_account)

        with pytest.raises(CommandError):
            call_command('verify_ledgers', '--fail-on-mismatch', stdout=StringIO())

    def test_single_email(self, db_account):
        out = StringIO()
        call_command('verify_ledgers', '--email', db_account.email, stdout=out)

        assert 'All 1 account(s)' in out.getvalue()

    def test_unknown_email(self, db):
        with pytest.raises(CommandError, match='User not found.'):
            call_command('verify_ledgers', '--email', 'ghost@example.com', stdout=StringIO())
