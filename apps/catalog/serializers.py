from rest_framework import serializers


class CosmeticLabelSerializer(serializers.Serializer):
    value = serializers.CharField()
    displayValue = serializers.CharField(source='display_value')


class CosmeticSerializer(serializers.Serializer):
    """Catalog item, camelCase like the ledger payloads."""

    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    type = CosmeticLabelSerializer()
    rarity = CosmeticLabelSerializer()
    image = serializers.CharField()
    images = serializers.DictField(child=serializers.CharField())
    added = serializers.DateTimeField(allow_null=True)
    price = serializers.IntegerField()
    regularPrice = serializers.IntegerField(source='regular_price')
    isNew = serializers.BooleanField(source='is_new')
    isOnSale = serializers.BooleanField(source='is_on_sale')
    isPromotional = serializers.BooleanField(source='is_promotional')
    bundleIds = serializers.ListField(child=serializers.CharField(), source='bundle_ids')


class CatalogFacetsSerializer(serializers.Serializer):
    types = CosmeticLabelSerializer(many=True)
    rarities = CosmeticLabelSerializer(many=True)


class CatalogFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the catalog listings."""

    search = serializers.CharField(required=False, allow_blank=True)
    type = serializers.CharField(required=False, allow_blank=True)
    rarity = serializers.CharField(required=False, allow_blank=True)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    is_new = serializers.BooleanField(required=False, allow_null=True, default=None)
    on_sale = serializers.BooleanField(required=False, allow_null=True, default=None)
    promotional = serializers.BooleanField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({'date_to': 'Must not be before date_from.'})
        return attrs
