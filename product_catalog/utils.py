"""
Product Catalog Utilities

- DynamoDB type conversion (float ↔ Decimal) for items crossing the store boundary
- JSON-safe conversion of handler results
- Logging setup for the compute entry point
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Data Serialization (Store Boundary)
# =============================================================================

def to_dynamodb_types(obj: Any) -> Any:
    """Recursively convert Python values to types the boto3 Table resource accepts.

    Floats become Decimals (boto3 refuses floats), None values inside maps are
    dropped, everything else passes through unchanged.

    Example:
        >>> to_dynamodb_types({'price': 9.99, 'tags': ['a'], 'note': None})
        {'price': Decimal('9.99'), 'tags': ['a']}
    """
    if isinstance(obj, dict):
        return {k: to_dynamodb_types(v) for k, v in obj.items() if v is not None}
    elif isinstance(obj, (list, tuple)):
        return [to_dynamodb_types(item) for item in obj]
    elif isinstance(obj, bool):
        return obj
    elif isinstance(obj, float):
        return Decimal(str(obj))
    else:
        return obj


def from_dynamodb_types(obj: Any) -> Any:
    """Recursively convert DynamoDB values back to plain Python types.

    Decimals become ints when integral, floats otherwise. Sets come back as lists.

    Example:
        >>> from_dynamodb_types({'price': Decimal('9.99'), 'stock': Decimal('3')})
        {'price': 9.99, 'stock': 3}
    """
    if isinstance(obj, dict):
        return {k: from_dynamodb_types(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple, set)):
        return [from_dynamodb_types(item) for item in obj]
    elif isinstance(obj, Decimal):
        if obj == obj.to_integral_value():
            return int(obj)
        return float(obj)
    else:
        return obj


def to_json_safe(obj: Any) -> Any:
    """Convert a handler result into JSON-serializable plain data.

    Pydantic models are dumped without None fields, Decimals are converted,
    and containers are walked recursively.
    """
    from pydantic import BaseModel

    if isinstance(obj, BaseModel):
        return to_json_safe(obj.model_dump(exclude_none=True))
    elif isinstance(obj, dict):
        return {k: to_json_safe(v) for k, v in obj.items() if v is not None}
    elif isinstance(obj, (list, tuple, set)):
        return [to_json_safe(item) for item in obj]
    return from_dynamodb_types(obj)


# =============================================================================
# Logging
# =============================================================================

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(config=None, level: Optional[int] = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        config: Optional CatalogConfig; DEBUG when enable_debug_logging is set
        level: Explicit level, overrides config

    Returns:
        The ``product_catalog`` package logger
    """
    if level is None:
        level = logging.DEBUG if config is not None and config.enable_debug_logging else logging.INFO

    package_logger = logging.getLogger("product_catalog")
    package_logger.setLevel(level)

    # Lambda installs a root handler
    if not logging.getLogger().handlers and not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    if level == logging.DEBUG:
        logging.getLogger("botocore").setLevel(logging.INFO)

    return package_logger


def summarize_arguments(arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Return a log-friendly view of operation arguments (nested maps reduced to their keys)."""
    summary = {}
    for key, value in arguments.items():
        if isinstance(value, dict):
            summary[key] = sorted(value.keys())
        else:
            summary[key] = value
    return summary
