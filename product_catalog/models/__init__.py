# Base mixins
from .base import DynamoDBMixin

# Domain models
from .product import Product, ProductPage

# Routing and pipeline envelopes
from .operations import (
    MUTATIONS,
    InboundEvent,
    Operation,
    OperationRequest,
    OperationResponse,
)

__all__ = [
    "DynamoDBMixin",

    "Product",
    "ProductPage",

    "MUTATIONS",
    "InboundEvent",
    "Operation",
    "OperationRequest",
    "OperationResponse",
]
