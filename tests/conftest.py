"""
Test configuration and fixtures for the product catalog router.

Provides the configuration, a moto-mocked DynamoDB product table, the real
DynamoDB-backed store, and an in-memory store double.
"""

import sys
from pathlib import Path

# Add repository root to path so we can import product_catalog and tests.helpers
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from product_catalog import (
    CatalogConfig,
    DynamoDBProductStore,
    OperationRouter,
    ProductReadApi,
    ProductWriteApi,
    RequestContextStage,
    ResponseShapingStage,
)
from product_catalog.lambda_handler import reset_router
from tests.helpers import InMemoryProductStore


TEST_TABLE_NAME = 'test_products'
TEST_INDEX_NAME = 'CategoryIndex'


@pytest.fixture(autouse=True)
def aws_test_environment(monkeypatch):
    """Keep tests off real AWS credentials and away from a developer's .env."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    for name in (
        'AWS_REGION',
        'DYNAMODB_ENDPOINT_URL',
        'DYNAMODB_TABLE_PREFIX',
        'PRODUCT_TABLE',
        'PRODUCT_CATEGORY_INDEX',
        'PRODUCT_PAGE_SIZE',
        'ENVIRONMENT',
        'UNKNOWN_OPERATION_POLICY',
        'REQUIRE_IDENTITY_FOR_MUTATIONS',
        'CATALOG_DEBUG_LOGGING',
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    reset_router()


@pytest.fixture
def catalog_config():
    """Catalog configuration for mocked testing."""
    return CatalogConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        product_table=TEST_TABLE_NAME,
        category_index_name=TEST_INDEX_NAME,
        page_size=2,
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def products_table(mock_dynamodb_resource):
    """Create the product table with its category GSI."""
    table = mock_dynamodb_resource.create_table(
        TableName=TEST_TABLE_NAME,
        KeySchema=[
            {'AttributeName': 'id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'id', 'AttributeType': 'S'},
            {'AttributeName': 'category', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': TEST_INDEX_NAME,
                'KeySchema': [
                    {'AttributeName': 'category', 'KeyType': 'HASH'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return table


@pytest.fixture
def dynamodb_store(catalog_config, products_table):
    """DynamoDB-backed product store against the mocked table."""
    return DynamoDBProductStore(catalog_config)


@pytest.fixture
def memory_store():
    """In-memory store double."""
    return InMemoryProductStore(page_size=2)


@pytest.fixture
def read_api(memory_store):
    return ProductReadApi(memory_store)


@pytest.fixture
def write_api(memory_store):
    return ProductWriteApi(memory_store)


@pytest.fixture
def router(memory_store):
    """Router over the in-memory store with the default stages."""
    return OperationRouter(
        memory_store,
        stages=[RequestContextStage(), ResponseShapingStage()],
    )


@pytest.fixture
def dynamodb_router(dynamodb_store):
    """Router over the mocked DynamoDB table with the default stages."""
    return OperationRouter(
        dynamodb_store,
        stages=[RequestContextStage(), ResponseShapingStage()],
    )


# Sample Data Fixtures

@pytest.fixture
def sample_product_data():
    """Sample product with extra attributes."""
    return {
        "id": "p1",
        "category": "tools",
        "name": "Claw Hammer",
        "price": 12.5,
        "stock": 40,
        "discontinued": False,
        "tags": ["steel", "hand-tool"],
    }


@pytest.fixture
def sample_catalog():
    """A small catalog spread over several categories."""
    return [
        {"id": "p1", "category": "tools", "name": "Claw Hammer"},
        {"id": "p2", "category": "tools", "name": "Screwdriver"},
        {"id": "p3", "category": "parts", "name": "Hinge"},
        {"id": "p4", "category": "paint", "name": "Primer"},
        {"id": "p5", "name": "Gift Card"},
    ]

