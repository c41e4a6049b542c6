"""
Thin DynamoDB Table Gateway

A lightweight wrapper around the boto3 Table resource for the product table.
The gateway:

1. Creates the boto3 resource and Table handle lazily from CatalogConfig
2. Passes item operations through with no caching and no retry layer of its own
3. Maps every botocore failure to a StoreError subclass, with operation context

Store adapters compose these calls; handlers never touch the gateway directly.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, ParamValidationError

from ..config import CatalogConfig
from ..exceptions import (
    ConnectionError,
    RetryableError,
    StoreValidationError,
)

logger = logging.getLogger(__name__)


RETRYABLE_ERROR_CODES = frozenset({
    'ProvisionedThroughputExceededException',
    'RequestLimitExceeded',
    'ThrottlingException',
    'InternalServerError',
    'ServiceUnavailable',
    'TransactionInProgressException',
    'RequestTimeoutException',
})

AUTH_ERROR_CODES = frozenset({
    'UnrecognizedClientException',
    'AccessDeniedException',
    'ExpiredTokenException',
    'InvalidSignatureException',
    'IncompleteSignatureException',
})


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to store exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional product id for context

    Returns:
        StoreValidationError: For requests DynamoDB rejects as malformed
        RetryableError: For throttling and temporary unavailability
        ConnectionError: For missing tables, auth failures and unknown codes
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ResourceNotFoundException':
        # GetItem misses return no Item; this code means the table or index is missing
        return ConnectionError(f"Table or index not found - {full_message}", original_error=error)

    elif error_code in ('ValidationException', 'ItemCollectionSizeLimitExceededException'):
        return StoreValidationError(f"Validation failed - {full_message}", original_error=error)

    elif error_code in RETRYABLE_ERROR_CODES:
        return RetryableError(f"Throttling or service unavailable - {full_message}", original_error=error)

    elif error_code in AUTH_ERROR_CODES:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


def map_botocore_error(error: BotoCoreError, operation: str, table_name: str) -> Exception:
    """Map client-side botocore failures (bad parameters, unreachable endpoint)."""
    if isinstance(error, ParamValidationError):
        return StoreValidationError(f"{operation} on {table_name}: invalid parameters - {error}", original_error=error)
    return ConnectionError(f"{operation} on {table_name}: {error}", original_error=error)


class TableGateway:
    """
    Thin gateway for the product table.

    Exposes the item operations the store adapter needs and nothing else.
    """

    def __init__(self, config: CatalogConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: Catalog configuration
            table_name: Name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """Get boto3 DynamoDB Table resource."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def get_item(self, key: Dict[str, Any], consistent_read: bool = False) -> Optional[Dict[str, Any]]:
        """
        Get a single item by primary key.

        Args:
            key: Primary key of the item
            consistent_read: Use a strongly consistent read

        Returns:
            The raw item, or None when no item has this key
        """
        try:
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, _resource_id(key)) from e
        except BotoCoreError as e:
            raise map_botocore_error(e, "GetItem", self.table_name) from e
        return response.get('Item')

    def put_item(self, item: Dict[str, Any]) -> None:
        """
        Unconditionally write an item, replacing any item with the same key.

        Args:
            item: Item to store, already converted to DynamoDB types
        """
        try:
            self.table.put_item(Item=item)
            logger.info(f"Put item in {self.table_name}: {_resource_id(item)}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, _resource_id(item)) from e
        except BotoCoreError as e:
            raise map_botocore_error(e, "PutItem", self.table_name) from e

    def delete_item(self, key: Dict[str, Any]) -> None:
        """
        Delete an item by primary key. Deleting a missing key succeeds.

        Args:
            key: Primary key of item to delete
        """
        try:
            self.table.delete_item(Key=key)
            logger.info(f"Deleted item from {self.table_name}: {key}")
        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, _resource_id(key)) from e
        except BotoCoreError as e:
            raise map_botocore_error(e, "DeleteItem", self.table_name) from e

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB Query operation.

        Raw pass-through to boto3 with error handling.

        Args:
            **kwargs: All boto3 query parameters

        Returns:
            Raw DynamoDB response

        Example:
            response = gateway.query(
                IndexName='CategoryIndex',
                KeyConditionExpression=Key('category').eq('tools'),
                Limit=50
            )
        """
        try:
            return self.table.query(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Query", self.table_name) from e
        except BotoCoreError as e:
            raise map_botocore_error(e, "Query", self.table_name) from e

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB Scan operation.

        Scans read the whole table; callers should page with Limit and
        ExclusiveStartKey rather than asking for everything at once.

        Args:
            **kwargs: All boto3 scan parameters

        Returns:
            Raw DynamoDB response
        """
        if 'Limit' not in kwargs:
            logger.warning(f"Scan on {self.table_name} without Limit - consider adding one")
        try:
            return self.table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e
        except BotoCoreError as e:
            raise map_botocore_error(e, "Scan", self.table_name) from e


def _resource_id(item: Dict[str, Any]) -> Optional[str]:
    value = item.get('id')
    return str(value) if value is not None else None


def create_table_gateway(config: CatalogConfig) -> TableGateway:
    """
    Factory function to create a TableGateway for the product table.

    Args:
        config: Catalog configuration

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config, config.get_table_name())
