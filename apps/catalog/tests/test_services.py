from datetime import date

import pytest

from apps.catalog.services import (
    CosmeticNotFoundError,
    filter_cosmetics,
    find_cosmetic,
    get_facets,
    get_owned_cosmetics,
    merge_catalog,
)


@pytest.fixture
def merged(catalog_client):
    return merge_catalog(shop=catalog_client.get_shop(), new=catalog_client.get_new_cosmetics())


class TestMergeCatalog:

    def test_shop_first_then_new(self, merged):
        assert [item.id for item in merged] == ['CID_GALAXY', 'EID_FLOSS', 'CID_NEW']

    def test_shop_item_in_new_list_is_flagged_new(self, merged):
        floss = merged[1]

        assert floss.is_new is True
        assert floss.is_on_sale is True
        assert floss.price == 800

    def test_new_only_item_keeps_default_price(self, merged):
        newcomer = merged[2]

        assert newcomer.is_new is True
        assert newcomer.is_on_sale is False


class TestFilterCosmetics:

    def test_no_filters(self, merged):
        assert filter_cosmetics(merged) == merged

    def test_search_is_case_insensitive(self, merged):
        assert [i.id for i in filter_cosmetics(merged, search='  gAlAxY ')] == ['CID_GALAXY']

    def test_type_and_rarity(self, merged):
        assert [i.id for i in filter_cosmetics(merged, type='emote')] == ['EID_FLOSS']
        assert [i.id for i in filter_cosmetics(merged, rarity='epic')] == ['CID_NEW']

    def test_flags(self, merged):
        assert [i.id for i in filter_cosmetics(merged, is_new=False)] == ['CID_GALAXY']
        assert [i.id for i in filter_cosmetics(merged, on_sale=False)] == ['CID_NEW']
        assert [i.id for i in filter_cosmetics(merged, promotional=True)] == ['CID_GALAXY']

    def test_date_range_includes_whole_end_day(self, merged):
        result = filter_cosmetics(merged, date_from=date(2024, 5, 21), date_to=date(2024, 5, 21))

        assert [i.id for i in result] == ['CID_NEW']

    def test_shop_added_date_wins_over_new_list(self, merged):
        # Floss is in both lists; the shop copy was added in March
        result = filter_cosmetics(merged, date_from=date(2024, 3, 1), date_to=date(2024, 3, 31))

        assert [i.id for i in result] == ['CID_GALAXY', 'EID_FLOSS']

    def test_date_filter_excludes_undated(self, merged):
        undated = merged[0].with_changes(added=None)

        assert filter_cosmetics([undated], date_from=date(2000, 1, 1)) == []


class TestFacets:

    def test_types_sorted_rarities_first_seen(self, merged):
        facets = get_facets(merged)

        assert [t.value for t in facets['types']] == ['emote', 'outfit']
        assert [r.value for r in facets['rarities']] == ['legendary', 'rare', 'epic']


class TestFindCosmetic:

    def test_found_in_later_source(self, catalog_client, merged):
        sources = [merged, catalog_client.get_all_cosmetics()]

        assert find_cosmetic(cosmetic_id='CID_OLD', sources=sources).name == 'Renegade Raider'

    def test_first_source_wins(self, catalog_client, merged):
        sources = [merged, catalog_client.get_all_cosmetics()]

        assert find_cosmetic(cosmetic_id='CID_GALAXY', sources=sources).is_on_sale is True

    def test_not_found(self, merged):
        with pytest.raises(CosmeticNotFoundError):
            find_cosmetic(cosmetic_id='NOPE', sources=[merged])


class TestOwnedCosmetics:

    def test_inventory_order_and_unknown_ids(self, merged):
        owned = get_owned_cosmetics(inventory=['CID_NEW', 'UNKNOWN', 'CID_GALAXY'], catalog=merged)

        assert [i.id for i in owned] == ['CID_NEW', 'CID_GALAXY']
