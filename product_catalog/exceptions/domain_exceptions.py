"""
Domain-Specific Exceptions for the Product Catalog

Organized by category:
1. Request Validation Errors
2. Store Errors (backend failures raised by the store adapter)
3. Routing and Pipeline Errors

A read that targets a missing key is not an error: handlers return None.
"""

from typing import Any, Dict, Optional

from .base import CatalogError


# =============================================================================
# Request Validation Errors
# =============================================================================

class ValidationError(CatalogError):
    """Raised when a required argument is missing or malformed.

    Used for:
    - Missing primary key on update
    - Non-mapping product payloads
    - Store items that cannot be read back into a Product
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Store Errors
# =============================================================================

class StoreError(CatalogError):
    """Raised when the backing store is unreachable or rejects an operation.

    Store errors propagate unmodified to the caller of the router; nothing at
    this layer retries or compensates.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class ConnectionError(StoreError):
    """Raised when connection to DynamoDB fails.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Missing tables
    - Unrecognised DynamoDB error codes
    """


class RetryableError(StoreError):
    """Raised when an operation fails on throttling or temporary unavailability.

    The caller decides whether to retry.
    """


class StoreValidationError(StoreError):
    """Raised when DynamoDB rejects the shape of a request (ValidationException)."""


# =============================================================================
# Routing and Pipeline Errors
# =============================================================================

class UnknownOperationError(CatalogError):
    """Raised for an operation name missing from the dispatch table.

    Only raised when the router runs with the "error" unknown-operation policy.
    """

    def __init__(self, operation: Optional[str]):
        self.operation = operation
        super().__init__(f"Unknown operation: {operation!r}", context={'operation': operation})


class RequestRejectedError(CatalogError):
    """Raised by a before-stage to stop a request before its handler runs."""

    def __init__(self, message: str, stage: Optional[str] = None, operation: Optional[str] = None):
        self.stage = stage
        self.operation = operation
        context = {}
        if stage:
            context['stage'] = stage
        if operation:
            context['operation'] = operation
        super().__init__(message, context=context)
