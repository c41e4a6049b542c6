"""
Compute entry point.

The execution environment calls ``handler`` once per operation. One router
(and so one boto3 resource) is built per process on the first call and reused
by later invocations in the same process.
"""

import logging
from typing import Any, Optional

from .config import CatalogConfig
from .router import OperationRouter, create_router
from .utils import configure_logging

logger = logging.getLogger(__name__)

_router: Optional[OperationRouter] = None


def get_router() -> OperationRouter:
    """Return the process router, building it from the environment on first use."""
    global _router
    if _router is None:
        config = CatalogConfig.from_env()
        configure_logging(config)
        _router = create_router(config)
        logger.info(f"Router ready for table {config.get_table_name()} ({', '.join(_router.operations)})")
    return _router


def reset_router() -> None:
    """Drop the cached router so the next call rebuilds it (configuration changes, tests)."""
    global _router
    _router = None


def handler(event: Any, context: Any = None) -> Any:
    """Lambda handler: dispatch one operation event."""
    return get_router().dispatch(event, context)
