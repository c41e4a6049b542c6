"""
Built-in pipeline stages.
"""

import logging
import time
import uuid
from typing import Any, Dict, Iterable, Optional

from ..exceptions import RequestRejectedError
from ..models import MUTATIONS, Operation, OperationRequest, OperationResponse, ProductPage
from ..utils import summarize_arguments, to_json_safe
from .base import Stage

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ('x-amzn-requestid', 'x-request-id', 'x-correlation-id')


def _header(headers: Dict[str, Any], name: str) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


class RequestContextStage(Stage):
    """
    Inject the correlation id and caller identity into the request context,
    and log each operation's start, completion and failure.
    """

    def before(self, request: OperationRequest) -> OperationRequest:
        request_id = request.request_id
        if not request_id:
            for header in REQUEST_ID_HEADERS:
                request_id = _header(request.headers, header)
                if request_id:
                    break
        request.request_id = request_id or str(uuid.uuid4())

        identity = request.identity or {}
        request.context['request_id'] = request.request_id
        request.context['caller'] = identity.get('username') or identity.get('sub')
        request.context['started_at'] = time.perf_counter()

        logger.info(
            f"{request.operation.value} started "
            f"(request_id={request.request_id}, caller={request.context['caller']}, "
            f"arguments={summarize_arguments(request.arguments)})"
        )
        return request

    def after(self, request: OperationRequest, response: OperationResponse) -> OperationResponse:
        elapsed_ms = (time.perf_counter() - request.context.get('started_at', time.perf_counter())) * 1000
        if response.failed:
            logger.error(
                f"{request.operation.value} failed after {elapsed_ms:.1f}ms "
                f"(request_id={request.request_id}): {type(response.error).__name__}: {response.error}"
            )
        else:
            logger.info(f"{request.operation.value} completed in {elapsed_ms:.1f}ms (request_id={request.request_id})")
        return response


class IdentityRequiredStage(Stage):
    """Reject the configured operations when the request carries no caller identity."""

    def __init__(self, operations: Iterable[Operation] = MUTATIONS):
        self.operations = frozenset(operations)

    def before(self, request: OperationRequest) -> OperationRequest:
        if request.operation in self.operations and not request.identity:
            raise RequestRejectedError(
                f"{request.operation.value} requires an authenticated caller",
                stage=self.name,
                operation=request.operation.value,
            )
        return request


class ResponseShapingStage(Stage):
    """
    Turn handler results into plain JSON-safe data.

    Products become dicts without None fields, pages become
    {"items": [...], "nextToken": ...}, and Decimals become int/float.
    Errors are left for the router to raise.
    """

    def after(self, request: OperationRequest, response: OperationResponse) -> OperationResponse:
        if response.failed:
            return response
        result = response.result
        if isinstance(result, ProductPage):
            response.result = {
                'items': to_json_safe(result.items),
                'nextToken': result.next_token,
            }
        else:
            response.result = to_json_safe(result)
        return response
