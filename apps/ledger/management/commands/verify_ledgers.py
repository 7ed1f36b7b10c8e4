"""
Management command to check every account against its history.

Replays each user's purchase/refund history from the starting balance and
reports accounts whose stored balance or inventory differ.

Usage:
    python manage.py verify_ledgers
    python manage.py verify_ledgers --email someone@example.com --fail-on-mismatch
"""

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import find_user_by_email, UserNotFoundError
from apps.ledger.services import replay_history
from apps.ledger.stores import get_ledger_store


class Command(BaseCommand):
    help = 'Replay ledger histories and report accounts that do not match'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            help='Only check this user',
        )
        parser.add_argument(
            '--initial-balance',
            type=int,
            default=None,
            help='Starting balance to replay from (defaults to INITIAL_BALANCE)',
        )
        parser.add_argument(
            '--fail-on-mismatch',
            action='store_true',
            help='Exit with an error when any account does not match',
        )

    def handle(self, *args, **options):
        store = get_ledger_store()

        if options['email']:
            try:
                accounts = [find_user_by_email(store=store, email=options['email'])]
            except UserNotFoundError as e:
                raise CommandError(str(e))
        else:
            accounts = store.list_all()

        if not accounts:
            self.stdout.write(self.style.SUCCESS('No accounts to check.'))
            return

        mismatched = 0
        for account in accounts:
            balance, inventory = replay_history(account, options['initial_balance'])
            if balance == account.balance and set(inventory) == set(account.inventory):
                continue

            mismatched += 1
            self.stdout.write(f'  - {account.email}')
            if balance != account.balance:
                self.stdout.write(f'      balance: stored {account.balance}, replayed {balance}')
            missing = sorted(set(inventory) - set(account.inventory))
            extra = sorted(set(account.inventory) - set(inventory))
            if missing:
                self.stdout.write(f'      missing from inventory: {", ".join(missing)}')
            if extra:
                self.stdout.write(f'      not explained by history: {", ".join(extra)}')

        if mismatched == 0:
            self.stdout.write(
                self.style.SUCCESS(f'All {len(accounts)} account(s) match their history.')
            )
            return

        message = f'{mismatched} of {len(accounts)} account(s) do not match their history.'
        if options['fail_on_mismatch']:
            raise CommandError(message)
        self.stdout.write(self.style.WARNING(message))
