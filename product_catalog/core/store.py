"""
Product Store Adapter

StoreAdapter is the contract handlers depend on. It is passed to handlers
through their constructors, so tests can substitute an in-memory double and
several stores can coexist in one process.

DynamoDBProductStore implements the contract against one DynamoDB table:
primary-key point reads, writes and deletes on ``id``, a paginated full scan,
and an equality query on the category GSI.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Key

from ..config import CatalogConfig
from ..models import Product, ProductPage
from .pagination import PageIterator, decode_page_token, encode_page_token
from .table_gateway import TableGateway, create_table_gateway

logger = logging.getLogger(__name__)


class StoreAdapter(ABC):
    """Key-value store contract for products.

    Every method is one or more round trips to the backing store. A missing
    key is never an error: reads return None and deletes are idempotent.
    """

    @abstractmethod
    def get_by_key(self, product_id: str) -> Optional[Product]:
        """Return the product stored under ``product_id``, or None."""

    @abstractmethod
    def put(self, product: Product) -> Product:
        """Unconditionally write ``product``, replacing any item with the same id."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove the product stored under ``product_id``; no-op when absent."""

    @abstractmethod
    def scan_all(self, page_size: Optional[int] = None) -> PageIterator:
        """Return a lazy, restartable sequence of pages covering the whole table."""

    @abstractmethod
    def scan_page(self, limit: Optional[int] = None, next_token: Optional[str] = None) -> ProductPage:
        """Return a single page of the full scan, starting after ``next_token``."""

    @abstractmethod
    def query_by_secondary_index(self, category: str) -> List[Product]:
        """Return every product whose category equals ``category``, unordered."""


class DynamoDBProductStore(StoreAdapter):
    """StoreAdapter backed by a DynamoDB table through TableGateway."""

    def __init__(self, config: CatalogConfig, gateway: Optional[TableGateway] = None):
        """Initialize the store.

        Args:
            config: Catalog configuration (table name, index name, page size)
            gateway: Pre-built gateway; one is created from config when omitted
        """
        self.config = config
        self.gateway = gateway or create_table_gateway(config)
        self.partition_key = Product.Meta.partition_key
        self.category_key = Product.Meta.gsis[0]['partition_key']
        self.category_index_name = config.category_index_name

    def get_by_key(self, product_id: str) -> Optional[Product]:
        """
        Get a product by id.

        DynamoDB Operation: GetItem with primary key
        """
        item = self.gateway.get_item({self.partition_key: product_id})
        if item is None:
            logger.debug(f"Product {product_id} not found in {self.gateway.table_name}")
            return None
        return Product.from_dynamodb_item(item)

    def put(self, product: Product) -> Product:
        """
        Write a product, overwriting any existing item with the same id.

        DynamoDB Operation: PutItem without condition (last write wins)
        """
        item = product.to_dynamodb_item()
        self.gateway.put_item(item)
        return Product.from_dynamodb_item(item)

    def delete(self, product_id: str) -> None:
        """
        Delete a product by id.

        DynamoDB Operation: DeleteItem without condition (idempotent)
        """
        self.gateway.delete_item({self.partition_key: product_id})

    def scan_all(self, page_size: Optional[int] = None) -> PageIterator:
        """
        Full-table scan as a lazy sequence of pages.

        DynamoDB Operation: Scan with Limit, following LastEvaluatedKey
        """
        return PageIterator(self._scan, page_size or self.config.page_size)

    def scan_page(self, limit: Optional[int] = None, next_token: Optional[str] = None) -> ProductPage:
        """
        One page of the full-table scan.

        DynamoDB Operation: Scan with Limit and ExclusiveStartKey
        """
        start_key = decode_page_token(next_token, (self.partition_key,))
        items, last_key = self._scan(limit or self.config.page_size, start_key)
        return ProductPage(
            items=[Product.from_dynamodb_item(item) for item in items],
            next_token=encode_page_token(last_key),
        )

    def query_by_secondary_index(self, category: str) -> List[Product]:
        """
        All products in a category.

        DynamoDB Operation: Query on the category GSI, following LastEvaluatedKey
        GSI Structure: PK=category
        """
        pages = PageIterator(
            lambda limit, last_key: self._query_category(category, limit, last_key),
            self.config.page_size,
        )
        return list(pages.items())

    def _scan(self, limit: Optional[int], last_key: Optional[Dict[str, Any]]) -> Tuple[list, Optional[Dict[str, Any]]]:
        scan_kwargs: Dict[str, Any] = {}
        if limit:
            scan_kwargs['Limit'] = limit
        if last_key:
            scan_kwargs['ExclusiveStartKey'] = last_key

        response = self.gateway.scan(**scan_kwargs)
        return response.get('Items', []), response.get('LastEvaluatedKey')

    def _query_category(
        self,
        category: str,
        limit: Optional[int],
        last_key: Optional[Dict[str, Any]]
    ) -> Tuple[list, Optional[Dict[str, Any]]]:
        query_kwargs: Dict[str, Any] = {
            'IndexName': self.category_index_name,
            'KeyConditionExpression': Key(self.category_key).eq(category),
        }
        if limit:
            query_kwargs['Limit'] = limit
        if last_key:
            query_kwargs['ExclusiveStartKey'] = last_key

        response = self.gateway.query(**query_kwargs)
        return response.get('Items', []), response.get('LastEvaluatedKey')


def create_product_store(config: CatalogConfig) -> DynamoDBProductStore:
    """Factory function to create the DynamoDB-backed product store."""
    return DynamoDBProductStore(config)
