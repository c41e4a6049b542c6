"""
Product Catalog Operation Router

Routes named query/mutation operations (getProductById, listProducts,
productsByCategory, createProduct, updateProduct, deleteProduct) to handlers
that act on a DynamoDB product table, wrapping every call in a before/after
stage pipeline.
"""

from .config import CatalogConfig
from .exceptions import (
    CatalogError,
    ConnectionError,
    RequestRejectedError,
    RetryableError,
    StoreError,
    StoreValidationError,
    UnknownOperationError,
    ValidationError,
)
from .models import (
    InboundEvent,
    Operation,
    OperationRequest,
    OperationResponse,
    Product,
    ProductPage,
)
from .core import (
    DynamoDBProductStore,
    PageIterator,
    StoreAdapter,
    TableGateway,
    create_product_store,
    create_table_gateway,
)
from .handlers import ProductReadApi, ProductWriteApi
from .pipeline import (
    IdentityRequiredStage,
    RequestContextStage,
    ResponseShapingStage,
    Stage,
    StagePipeline,
)
from .router import OperationRouter, create_router, default_stages

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "CatalogConfig",

    # Exceptions
    "CatalogError",
    "ConnectionError",
    "RequestRejectedError",
    "RetryableError",
    "StoreError",
    "StoreValidationError",
    "UnknownOperationError",
    "ValidationError",

    # Models
    "InboundEvent",
    "Operation",
    "OperationRequest",
    "OperationResponse",
    "Product",
    "ProductPage",

    # Store
    "DynamoDBProductStore",
    "PageIterator",
    "StoreAdapter",
    "TableGateway",
    "create_product_store",
    "create_table_gateway",

    # Handlers
    "ProductReadApi",
    "ProductWriteApi",

    # Pipeline
    "IdentityRequiredStage",
    "RequestContextStage",
    "ResponseShapingStage",
    "Stage",
    "StagePipeline",

    # Router
    "OperationRouter",
    "create_router",
    "default_stages",
]
