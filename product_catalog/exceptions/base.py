"""
Root of the catalog error hierarchy.

Everything the router raises to its caller, apart from programming errors,
is a CatalogError. AppSync reports the class name as the errorType of a
failed resolver.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """Base class for router, handler and store errors.

    Attributes:
        message: Human-readable error message
        original_error: botocore or pydantic exception this error wraps, if any
        context: Identifiers worth logging with the error (product id, operation, stage)
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={self.context[key]}" for key in sorted(self.context))
        return f"{self.message} [{details}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"
