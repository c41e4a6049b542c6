"""
Core infrastructure components for product storage.

- TableGateway: Thin wrapper over boto3 DynamoDB table operations
- StoreAdapter: The store contract handlers depend on
- DynamoDBProductStore: StoreAdapter backed by DynamoDB
- PageIterator: Lazy, restartable pagination over scans and queries
"""

from .pagination import PageIterator, decode_page_token, encode_page_token
from .store import DynamoDBProductStore, StoreAdapter, create_product_store
from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error

__all__ = [
    "DynamoDBProductStore",
    "PageIterator",
    "StoreAdapter",
    "TableGateway",
    "create_product_store",
    "create_table_gateway",
    "decode_page_token",
    "encode_page_token",
    "map_dynamodb_error",
]
