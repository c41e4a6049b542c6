"""
Operation Router

Receives one inbound event, looks the operation name up in a fixed dispatch
table, and runs the matching handler inside the stage pipeline.

The router keeps no state between events: every dispatch builds its own
request and response, so one router instance can serve concurrent
invocations. An operation name missing from the table never reaches a stage,
a handler or the store; it resolves to None (policy "null") or raises
UnknownOperationError (policy "error").
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from .config import CatalogConfig
from .core import StoreAdapter, create_product_store
from .exceptions import UnknownOperationError
from .handlers import ProductReadApi, ProductWriteApi
from .models import InboundEvent, Operation, OperationRequest
from .pipeline import (
    IdentityRequiredStage,
    RequestContextStage,
    ResponseShapingStage,
    Stage,
    StagePipeline,
)

logger = logging.getLogger(__name__)

UNKNOWN_OPERATION_POLICIES = ('null', 'error')


class OperationRouter:
    """
    Dispatches inbound operation events to product handlers.

    Example:
        router = OperationRouter(store)
        router.dispatch({'field': 'getProductById', 'arguments': {'productId': 'p1'}})
    """

    def __init__(
        self,
        store: StoreAdapter,
        stages: Optional[Sequence[Stage]] = None,
        unknown_operation_policy: str = 'null'
    ):
        """Initialize the router.

        Args:
            store: Store the handlers read from and write to
            stages: Ordered pipeline stages (none when omitted)
            unknown_operation_policy: 'null' to return None, 'error' to raise
        """
        if unknown_operation_policy not in UNKNOWN_OPERATION_POLICIES:
            raise ValueError(f"unknown_operation_policy must be one of: {UNKNOWN_OPERATION_POLICIES}")

        self.store = store
        self.read_api = ProductReadApi(store)
        self.write_api = ProductWriteApi(store)
        self.pipeline = StagePipeline(stages)
        self.unknown_operation_policy = unknown_operation_policy
        self.dispatch_table: Dict[Operation, Callable[[OperationRequest], Any]] = self._build_dispatch_table()

    def _build_dispatch_table(self) -> Dict[Operation, Callable[[OperationRequest], Any]]:
        return {
            Operation.GET_PRODUCT_BY_ID: self._get_product_by_id,
            Operation.LIST_PRODUCTS: self._list_products,
            Operation.LIST_PRODUCTS_PAGE: self._list_products_page,
            Operation.PRODUCTS_BY_CATEGORY: self._products_by_category,
            Operation.CREATE_PRODUCT: self._create_product,
            Operation.UPDATE_PRODUCT: self._update_product,
            Operation.DELETE_PRODUCT: self._delete_product,
        }

    @property
    def operations(self) -> List[str]:
        return [operation.value for operation in self.dispatch_table]

    def dispatch(self, event: Any, context: Any = None) -> Any:
        """
        Handle one inbound event.

        Args:
            event: Raw event mapping ({"field"|"info": ..., "arguments": ...})
            context: Compute environment context (used for aws_request_id)

        Returns:
            The shaped handler result, or None for an unknown operation
            under the "null" policy

        Raises:
            UnknownOperationError: Unknown operation under the "error" policy
            CatalogError: Whatever a stage or handler raised
        """
        inbound = _parse_event(event)
        operation_name = inbound.operation_name if inbound else None
        operation = Operation.lookup(operation_name)

        if operation is None or operation not in self.dispatch_table:
            return self._unknown_operation(operation_name)

        request = OperationRequest.from_event(
            operation,
            inbound,
            request_id=getattr(context, 'aws_request_id', None),
        )
        response = self.pipeline.run(request, self.dispatch_table[operation])
        if response.error is not None:
            raise response.error
        return response.result

    __call__ = dispatch

    def _unknown_operation(self, operation_name: Optional[str]) -> None:
        if self.unknown_operation_policy == 'error':
            raise UnknownOperationError(operation_name)
        logger.warning(f"Unknown operation {operation_name!r}; returning null")
        return None

    # Handlers: unpack arguments and call the read/write APIs

    def _get_product_by_id(self, request: OperationRequest):
        return self.read_api.get_by_id(request.arguments.get('productId'))

    def _list_products(self, request: OperationRequest):
        return self.read_api.list_all()

    def _list_products_page(self, request: OperationRequest):
        return self.read_api.list_page(
            limit=request.arguments.get('limit'),
            next_token=request.arguments.get('nextToken'),
        )

    def _products_by_category(self, request: OperationRequest):
        return self.read_api.by_category(request.arguments.get('category'))

    def _create_product(self, request: OperationRequest):
        return self.write_api.create(request.arguments.get('product'))

    def _update_product(self, request: OperationRequest):
        return self.write_api.update(request.arguments.get('product'))

    def _delete_product(self, request: OperationRequest):
        return self.write_api.delete(request.arguments.get('productId'))


def _parse_event(event: Any) -> Optional[InboundEvent]:
    if not isinstance(event, Mapping):
        return None
    try:
        return InboundEvent.model_validate(dict(event))
    except PydanticValidationError as e:
        logger.warning(f"Malformed event ignored: {e}")
        return None


def default_stages(config: CatalogConfig) -> List[Stage]:
    """Build the default stage list for ``config``."""
    stages: List[Stage] = [RequestContextStage()]
    if config.require_identity_for_mutations:
        stages.append(IdentityRequiredStage())
    stages.append(ResponseShapingStage())
    return stages


def create_router(
    config: Optional[CatalogConfig] = None,
    store: Optional[StoreAdapter] = None,
    stages: Optional[Sequence[Stage]] = None
) -> OperationRouter:
    """
    Factory function wiring a router with its defaults.

    Args:
        config: Catalog configuration (from the environment when omitted)
        store: Store to use (DynamoDB store from config when omitted)
        stages: Pipeline stages (default_stages(config) when omitted)

    Returns:
        Configured OperationRouter
    """
    config = config or CatalogConfig.from_env()
    return OperationRouter(
        store=store if store is not None else create_product_store(config),
        stages=stages if stages is not None else default_stages(config),
        unknown_operation_policy=config.unknown_operation_policy,
    )
