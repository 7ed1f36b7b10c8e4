from urllib.error import URLError

from .conftest import FakeFetch


class TestCatalogClient:
    """Tests for CatalogClient with canned payloads."""

    def test_get_shop(self, catalog_client):
        shop = catalog_client.get_shop()

        assert [item.id for item in shop] == ['CID_GALAXY', 'EID_FLOSS']

    def test_get_shop_flat_entries(self, client_factory):
        fetch = FakeFetch({'/shop': {'data': {'entries': [{'finalPrice': 300, 'items': [{'id': 'X'}]}]}}})

        shop = client_factory(fetch).get_shop()

        assert [item.id for item in shop] == ['X']
        assert shop[0].price == 300

    def test_get_new_cosmetics_flags_new(self, catalog_client):
        new = catalog_client.get_new_cosmetics()

        assert [item.id for item in new] == ['EID_FLOSS', 'CID_NEW']
        assert all(item.is_new for item in new)

    def test_get_new_cosmetics_list_shape(self, client_factory):
        fetch = FakeFetch({'/cosmetics/new': {'data': {'items': [{'id': 'Y', 'name': 'Y'}]}}})

        assert [item.id for item in client_factory(fetch).get_new_cosmetics()] == ['Y']

    def test_get_all_cosmetics(self, catalog_client):
        assert [item.id for item in catalog_client.get_all_cosmetics()] == ['CID_OLD', 'CID_GALAXY']

    def test_responses_are_cached(self, catalog_client, fake_fetch):
        catalog_client.get_shop()
        catalog_client.get_shop()

        assert fake_fetch.calls == ['/shop']

    def test_network_error_returns_empty_and_logs(self, client_factory, caplog):
        fetch = FakeFetch(error=URLError('connection refused'))

        with caplog.at_level('ERROR', logger='apps.catalog'):
            assert client_factory(fetch).get_shop() == []

        assert 'Failed to fetch https://api.test/v2/shop' in caplog.text

    def test_failures_are_not_cached(self, client_factory):
        failing = FakeFetch(error=URLError('down'))
        client_factory(failing).get_all_cosmetics()

        working = FakeFetch()
        assert len(client_factory(working).get_all_cosmetics()) == 2

    def test_unexpected_payload(self, client_factory, caplog):
        fetch = FakeFetch({'/cosmetics/br': {'status': 404, 'error': 'not found'}})

        with caplog.at_level('ERROR', logger='apps.catalog'):
            assert client_factory(fetch).get_all_cosmetics() == []

        assert 'Unexpected response' in caplog.text
