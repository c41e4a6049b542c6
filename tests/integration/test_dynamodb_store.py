"""
Integration tests for DynamoDBProductStore against a moto-mocked table.
"""

from decimal import Decimal

import pytest

from product_catalog.core import DynamoDBProductStore, decode_page_token
from product_catalog.exceptions import ConnectionError, ValidationError
from product_catalog.models import Product
from tests.helpers import InMemoryProductStore


pytestmark = pytest.mark.integration


@pytest.fixture
def seeded_store(dynamodb_store, sample_catalog):
    for data in sample_catalog:
        dynamodb_store.put(Product(**data))
    return dynamodb_store


class TestPointOperations:
    """GetItem, PutItem and DeleteItem."""

    def test_put_and_get(self, dynamodb_store, products_table, sample_product_data):
        stored = dynamodb_store.put(Product(**sample_product_data))

        raw = products_table.get_item(Key={'id': 'p1'})['Item']
        assert raw['price'] == Decimal('12.5')
        assert raw['tags'] == ['steel', 'hand-tool']

        fetched = dynamodb_store.get_by_key('p1')
        assert fetched == stored
        assert fetched.model_dump() == sample_product_data

    def test_get_missing(self, dynamodb_store):
        assert dynamodb_store.get_by_key('missing') is None

    def test_put_overwrites(self, dynamodb_store, products_table):
        dynamodb_store.put(Product(id='p1', category='tools', name='Old'))
        dynamodb_store.put(Product(id='p1', category='parts'))

        assert products_table.get_item(Key={'id': 'p1'})['Item'] == {'id': 'p1', 'category': 'parts'}

    def test_delete(self, seeded_store):
        seeded_store.delete('p1')

        assert seeded_store.get_by_key('p1') is None
        assert seeded_store.get_by_key('p2') is not None

    def test_delete_missing_is_idempotent(self, dynamodb_store):
        dynamodb_store.delete('missing')
        dynamodb_store.delete('missing')

    def test_item_written_elsewhere(self, dynamodb_store, products_table):
        products_table.put_item(Item={
            'id': 'p7',
            'category': 'tools',
            'dims': {'w': Decimal('1.5'), 'h': Decimal('2')},
        })

        product = dynamodb_store.get_by_key('p7')

        assert product.model_dump()['dims'] == {'w': 1.5, 'h': 2}


class TestScan:
    """Full scan pagination."""

    def test_scan_all_covers_table(self, seeded_store):
        pages = list(seeded_store.scan_all())

        ids = [product.id for page in pages for product in page.items]
        assert sorted(ids) == ['p1', 'p2', 'p3', 'p4', 'p5']
        assert len(pages) >= 3
        assert pages[-1].next_token is None

    def test_scan_all_restartable(self, seeded_store):
        pages = seeded_store.scan_all(page_size=4)

        first = sorted(product.id for product in pages.items())
        second = sorted(product.id for product in pages.items())

        assert first == second == ['p1', 'p2', 'p3', 'p4', 'p5']

    def test_scan_page_walk(self, seeded_store):
        seen = []
        token = None
        for _ in range(10):
            page = seeded_store.scan_page(limit=2, next_token=token)
            assert len(page.items) <= 2
            seen.extend(product.id for product in page.items)
            token = page.next_token
            if token is None:
                break

        assert sorted(seen) == ['p1', 'p2', 'p3', 'p4', 'p5']

    def test_scan_page_token_is_opaque_key(self, seeded_store):
        page = seeded_store.scan_page(limit=1)

        assert decode_page_token(page.next_token) == {'id': page.items[0].id}

    def test_scan_empty_table(self, dynamodb_store):
        assert list(dynamodb_store.scan_all().items()) == []

    def test_scan_page_bad_token(self, dynamodb_store):
        with pytest.raises(ValidationError):
            dynamodb_store.scan_page(next_token='bm90IGpzb24=')


class TestCategoryQuery:
    """Equality query on the category GSI."""

    def test_query_by_category(self, seeded_store):
        products = seeded_store.query_by_secondary_index('tools')

        assert sorted(product.id for product in products) == ['p1', 'p2']
        assert all(product.category == 'tools' for product in products)

    def test_query_follows_pages(self, dynamodb_store):
        for index in range(5):
            dynamodb_store.put(Product(id=f'bulk-{index}', category='bulk'))

        products = dynamodb_store.query_by_secondary_index('bulk')

        assert sorted(product.id for product in products) == [f'bulk-{index}' for index in range(5)]

    def test_query_no_match(self, seeded_store):
        assert seeded_store.query_by_secondary_index('garden') == []

    def test_product_without_category_not_indexed(self, seeded_store):
        found = [
            product.id
            for category in ('tools', 'parts', 'paint')
            for product in seeded_store.query_by_secondary_index(category)
        ]

        assert 'p5' not in found


class TestMissingTable:

    def test_missing_table_is_connection_error(self, catalog_config, mock_dynamodb_resource):
        store = DynamoDBProductStore(catalog_config)

        with pytest.raises(ConnectionError, match="Table or index not found"):
            store.get_by_key('p1')


class TestInMemoryParity:
    """The in-memory double answers category queries the way DynamoDB does."""

    @pytest.mark.parametrize("category", ['tools', 'parts', 'paint', 'garden', None])
    def test_category_query_matches(self, seeded_store, sample_catalog, category):
        memory = InMemoryProductStore()
        for data in sample_catalog:
            memory.put(Product(**data))

        expected = sorted(product.id for product in seeded_store.query_by_secondary_index(category))
        actual = sorted(product.id for product in memory.query_by_secondary_index(category))

        assert actual == expected
