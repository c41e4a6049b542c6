"""
Operation, Event and Pipeline Envelope Models

- Operation: the fixed set of operation names the router can dispatch
- InboundEvent: the raw invocation payload, in either the direct form
  ({"field": ...}) or the AppSync resolver form ({"info": {"fieldName": ...}})
- OperationRequest / OperationResponse: what flows through the stage pipeline
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Operation(str, Enum):
    """Operation names accepted by the router."""

    GET_PRODUCT_BY_ID = "getProductById"
    LIST_PRODUCTS = "listProducts"
    LIST_PRODUCTS_PAGE = "listProductsPage"
    PRODUCTS_BY_CATEGORY = "productsByCategory"
    CREATE_PRODUCT = "createProduct"
    UPDATE_PRODUCT = "updateProduct"
    DELETE_PRODUCT = "deleteProduct"

    @classmethod
    def lookup(cls, name: Optional[str]) -> Optional['Operation']:
        """Return the operation for ``name``, or None when it is not supported."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def is_mutation(self) -> bool:
        return self in MUTATIONS


MUTATIONS = frozenset({
    Operation.CREATE_PRODUCT,
    Operation.UPDATE_PRODUCT,
    Operation.DELETE_PRODUCT,
})


class InboundEvent(BaseModel):
    """Invocation payload delivered by the API layer."""

    field: Optional[str] = Field(None, description="Operation name (direct invocation form)")
    info: Dict[str, Any] = Field(default_factory=dict, description="Resolver info (AppSync form)")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Operation arguments")
    identity: Optional[Dict[str, Any]] = Field(None, description="Authenticated caller, if any")
    request: Dict[str, Any] = Field(default_factory=dict, description="Transport request details (headers)")
    source: Optional[Any] = Field(None, description="Parent resolver result, passed through")

    model_config = ConfigDict(extra='ignore')

    @field_validator('info', 'arguments', 'request', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return {} if v is None else v

    @property
    def operation_name(self) -> Optional[str]:
        return self.field or self.info.get('fieldName')

    @property
    def headers(self) -> Dict[str, Any]:
        return self.request.get('headers') or {}


class OperationRequest(BaseModel):
    """Request envelope seen by stages and handlers."""

    operation: Operation
    arguments: Dict[str, Any] = Field(default_factory=dict)
    identity: Optional[Dict[str, Any]] = None
    headers: Dict[str, Any] = Field(default_factory=dict)
    request_id: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict, description="Request-scoped values injected by stages")

    @classmethod
    def from_event(cls, operation: Operation, event: InboundEvent, request_id: Optional[str] = None) -> 'OperationRequest':
        return cls(
            operation=operation,
            arguments=dict(event.arguments),
            identity=event.identity,
            headers=dict(event.headers),
            request_id=request_id,
        )


class OperationResponse(BaseModel):
    """Handler outcome as it travels back through the after-stages."""

    result: Any = None
    error: Optional[Exception] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def failed(self) -> bool:
        return self.error is not None
