"""
Test helpers for the product catalog test suite.
"""

from .events import build_appsync_event, build_event
from .memory_store import InMemoryProductStore, failing_store

__all__ = [
    "InMemoryProductStore",
    "build_appsync_event",
    "build_event",
    "failing_store",
]
