# Base exception class
from .base import CatalogError

from .domain_exceptions import (
    ValidationError,
    StoreError,
    ConnectionError,
    RetryableError,
    StoreValidationError,
    UnknownOperationError,
    RequestRejectedError,
)

__all__ = [
    # Base exception
    "CatalogError",

    # Domain exceptions (alphabetically ordered)
    "ConnectionError",
    "RequestRejectedError",
    "RetryableError",
    "StoreError",
    "StoreValidationError",
    "UnknownOperationError",
    "ValidationError",
]
