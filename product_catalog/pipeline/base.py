"""
Stage Pipeline

Cross-cutting request and response shaping lives in an ordered list of
stages. Each stage may implement ``before`` (rewrite or reject the request)
and ``after`` (reshape the result or normalize the error). Handlers only ever
see requests that passed every before-stage, and only ever return domain
results or raise domain errors.

Execution order for stages [A, B]:

    A.before -> B.before -> handler -> B.after -> A.after

A stage rejects a request by raising RequestRejectedError from ``before``.
The handler and the remaining before-stages are skipped, the rejection is put
on the response, and the after-stages of the stages that already ran still
execute. After-stages also run when the handler raised.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from ..exceptions import RequestRejectedError
from ..models import OperationRequest, OperationResponse

logger = logging.getLogger(__name__)

Handler = Callable[[OperationRequest], Any]


class Stage:
    """Base class for pipeline stages; both hooks default to pass-through."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def before(self, request: OperationRequest) -> OperationRequest:
        return request

    def after(self, request: OperationRequest, response: OperationResponse) -> OperationResponse:
        return response


class StagePipeline:
    """Runs a handler inside an ordered list of stages."""

    def __init__(self, stages: Optional[Sequence[Stage]] = None):
        self.stages: List[Stage] = list(stages or [])

    def run(self, request: OperationRequest, handler: Handler) -> OperationResponse:
        """
        Run ``handler`` for ``request`` through every stage.

        Args:
            request: The request built by the router
            handler: Callable taking the (possibly rewritten) request

        Returns:
            OperationResponse with either a result or the error to raise
        """
        entered: List[Stage] = []
        response = OperationResponse()

        try:
            for stage in self.stages:
                request = stage.before(request)
                entered.append(stage)
        except RequestRejectedError as e:
            logger.info(f"{request.operation.value} rejected by {e.stage or 'stage'}: {e.message}")
            response.error = e
        else:
            try:
                response.result = handler(request)
            except Exception as e:
                response.error = e

        for stage in reversed(entered):
            response = stage.after(request, response)

        return response
