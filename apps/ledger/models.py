from django.db import models
import uuid


class TransactionType(models.TextChoices):
    PURCHASE = 'PURCHASE', 'Purchase'
    REFUND = 'REFUND', 'Refund'


class Transaction(models.Model):
    """One entry of a user's append-only purchase/refund history."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='history'
    )
    # Chronological index within the user's history (0-based)
    position = models.PositiveIntegerField()

    # Cosmetic reference (catalog ids are opaque strings)
    cosmetic_id = models.CharField(max_length=255)
    cosmetic_name = models.CharField(max_length=255, blank=True)
    cosmetic_image = models.CharField(max_length=500, blank=True)

    # Signed V-Bucks: negative for purchases, positive for refunds
    amount = models.IntegerField()
    type = models.CharField(max_length=10, choices=TransactionType.choices)
    date = models.DateTimeField()

    # Exact item ids added (purchase) or removed (refund) by this entry
    related_items = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'ledger_transactions'
        unique_together = [['user', 'position']]
        indexes = [
            models.Index(fields=['user', 'type'], name='ledger_tx_user_type_idx'),
            models.Index(fields=['cosmetic_id'], name='ledger_tx_cosmetic_idx'),
        ]
        ordering = ['user', 'position']

    def __str__(self):
        return f"{self.type} {self.cosmetic_name or self.cosmetic_id} ({self.amount:+d} V-Bucks)"
