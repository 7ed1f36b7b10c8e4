from datetime import datetime, timezone as dt_timezone

from apps.catalog.services import DEFAULT_PRICE, normalize_cosmetic, normalize_many
from apps.catalog.services.normalization import NO_DESCRIPTION, UNKNOWN_NAME

from .conftest import SHOP_PAYLOAD, make_item


class TestNormalizeCosmetic:
    """Tests for normalize_cosmetic."""

    def test_plain_cosmetic(self):
        cosmetic = normalize_cosmetic(make_item('CID_1', 'Raider', rarity='epic'))

        assert cosmetic.id == 'CID_1'
        assert cosmetic.name == 'Raider'
        assert cosmetic.type.value == 'outfit'
        assert cosmetic.type.display_value == 'Outfit'
        assert cosmetic.rarity.value == 'epic'
        assert cosmetic.added == datetime(2024, 3, 1, 10, 0, tzinfo=dt_timezone.utc)
        assert cosmetic.price == DEFAULT_PRICE
        assert cosmetic.regular_price == DEFAULT_PRICE
        assert cosmetic.is_on_sale is False
        assert cosmetic.is_promotional is False
        assert cosmetic.bundle_ids == []

    def test_image_prefers_featured(self):
        raw = make_item('CID_1', 'Raider', images={'icon': 'icon.png', 'featured': 'featured.png'})

        assert normalize_cosmetic(raw).image == 'featured.png'

    def test_image_falls_back_to_icon(self):
        assert normalize_cosmetic(make_item('CID_1', 'Raider')).image == 'https://img/CID_1/icon.png'

    def test_missing_fields_get_defaults(self):
        cosmetic = normalize_cosmetic({'id': 'CID_BARE'})

        assert cosmetic.name == UNKNOWN_NAME
        assert cosmetic.description == NO_DESCRIPTION
        assert cosmetic.type.value == 'unknown'
        assert cosmetic.rarity.value == 'common'
        assert cosmetic.added is None
        assert cosmetic.image == ''

    def test_images_not_a_mapping(self):
        cosmetic = normalize_cosmetic(make_item('CID_1', 'Raider', images=['icon.png']))

        assert cosmetic.images == {}
        assert cosmetic.image == ''

    def test_impossible_added_date_is_dropped(self):
        cosmetic = normalize_cosmetic(make_item('CID_1', 'Raider', added='2024-13-45T10:00:00Z'))

        assert cosmetic.id == 'CID_1'
        assert cosmetic.added is None

    def test_unparseable_added_date_is_dropped(self):
        assert normalize_cosmetic(make_item('CID_1', 'Raider', added='yesterday')).added is None

    def test_shop_bundle_entry(self):
        entry = SHOP_PAYLOAD['data']['featured']['entries'][0]

        cosmetic = normalize_cosmetic(entry)

        assert cosmetic.id == 'CID_GALAXY'
        assert cosmetic.name == 'Galaxy Set'
        assert cosmetic.price == 1500
        assert cosmetic.regular_price == 2000
        assert cosmetic.is_on_sale is True
        assert cosmetic.is_promotional is True
        assert cosmetic.bundle_ids == ['CID_GALAXY', 'BID_GALAXY']

    def test_single_item_shop_entry_is_not_bundle(self):
        entry = SHOP_PAYLOAD['data']['daily']['entries'][0]

        cosmetic = normalize_cosmetic(entry)

        assert cosmetic.id == 'EID_FLOSS'
        assert cosmetic.bundle_ids == []
        assert cosmetic.is_promotional is False

    def test_br_items_key(self):
        entry = {'finalPrice': 500, 'brItems': [make_item('CID_2', 'Two')]}

        assert normalize_cosmetic(entry).price == 500

    def test_invalid_entries(self):
        assert normalize_cosmetic(None) is None
        assert normalize_cosmetic({'name': 'No id'}) is None
        assert normalize_cosmetic({'finalPrice': 500, 'items': []}) is None


class TestNormalizeMany:

    def test_drops_invalid_and_applies_overrides(self):
        items = normalize_many([make_item('CID_1', 'One'), {'name': 'broken'}, 'junk'], is_new=True)

        assert [item.id for item in items] == ['CID_1']
        assert items[0].is_new is True
