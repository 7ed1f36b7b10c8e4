# Generated manually for the cosmetic shop ledger app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveIntegerField()),
                ('cosmetic_id', models.CharField(max_length=255)),
                ('cosmetic_name', models.CharField(blank=True, max_length=255)),
                ('cosmetic_image', models.CharField(blank=True, max_length=500)),
                ('amount', models.IntegerField()),
                ('type', models.CharField(choices=[('PURCHASE', 'Purchase'), ('REFUND', 'Refund')], max_length=10)),
                ('date', models.DateTimeField()),
                ('related_items', models.JSONField(blank=True, default=list)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='history', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'ledger_transactions',
                'ordering': ['user', 'position'],
                'indexes': [
                    models.Index(fields=['user', 'type'], name='ledger_tx_user_type_idx'),
                    models.Index(fields=['cosmetic_id'], name='ledger_tx_cosmetic_idx'),
                ],
                'unique_together': {('user', 'position')},
            },
        ),
    ]
