from rest_framework import serializers

from .domain import CosmeticPurchase
from .models import TransactionType


class TransactionSerializer(serializers.Serializer):
    """History entry as returned to clients."""

    id = serializers.UUIDField(read_only=True)
    cosmeticId = serializers.CharField(source='cosmetic_id', read_only=True)
    cosmeticName = serializers.CharField(source='cosmetic_name', read_only=True)
    cosmeticImage = serializers.CharField(source='cosmetic_image', read_only=True)
    amount = serializers.IntegerField(read_only=True)
    type = serializers.ChoiceField(choices=TransactionType.choices, read_only=True)
    date = serializers.DateTimeField(read_only=True)
    relatedItems = serializers.ListField(
        source='related_items',
        child=serializers.CharField(),
        read_only=True
    )


# =============================================================================
# Input serializers
# =============================================================================

class CosmeticItemInputSerializer(serializers.Serializer):
    """Cosmetic descriptor sent with a purchase."""

    id = serializers.CharField(max_length=255)
    price = serializers.IntegerField(min_value=0)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    image = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    bundleIds = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False,
        allow_null=True,
        default=list
    )


class BuyInputSerializer(serializers.Serializer):
    """Body of POST /api/buy."""

    userId = serializers.UUIDField()
    item = CosmeticItemInputSerializer()

    def to_purchase(self) -> CosmeticPurchase:
        item = self.validated_data['item']
        return CosmeticPurchase(
            id=item['id'],
            price=item['price'],
            name=item.get('name', ''),
            image=item.get('image', ''),
            bundle_ids=list(item.get('bundleIds') or []),
        )


class RefundInputSerializer(serializers.Serializer):
    """Body of POST /api/refund. ``amount`` is only used when no receipt exists."""

    userId = serializers.UUIDField()
    itemId = serializers.CharField(max_length=255)
    amount = serializers.IntegerField(required=False, allow_null=True, min_value=0, default=0)
