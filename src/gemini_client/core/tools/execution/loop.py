"""Resubmission loop for chained function calls."""

from __future__ import annotations

from typing import Protocol

from .dispatcher import FunctionCallDispatcher, NeedsResubmission
from ..registry import HandlerRegistry
from ...logger import get_logger
from ...types import GenerateContentRequest, GenerateContentResponse

logger = get_logger(__name__)


class ContentGenerator(Protocol):
    """Anything that can send a request to a model, e.g. ``GeminiClient``."""

    async def generate_content(self, model: str, request: GenerateContentRequest) -> GenerateContentResponse:
        ...


class FunctionCallingLoop:
    """Sends a request and keeps resubmitting function results until the model answers.

    Each round appends the model's function-call turn and the function responses
    to a copy of the request's history. The caller's request is never modified.
    """

    def __init__(self, *, dispatcher: FunctionCallDispatcher, max_function_loops: int = 5) -> None:
        """Initialize the loop.

        Args:
            dispatcher: Dispatcher used for every round.
            max_function_loops: Maximum number of dispatch rounds before giving up.
        """
        self._dispatcher = dispatcher
        self._max_function_loops = max_function_loops

    async def run(
        self,
        *,
        model: str,
        request: GenerateContentRequest,
        registry: HandlerRegistry,
        generator: ContentGenerator,
    ) -> GenerateContentResponse:
        """Run the loop.

        Returns:
            The first response without function calls, or the last response once
            ``max_function_loops`` rounds have been dispatched.
        """
        current_request = request
        response = await generator.generate_content(model, current_request)

        for loop_index in range(self._max_function_loops):
            outcome = await self._dispatcher.dispatch(response, registry)
            if not isinstance(outcome, NeedsResubmission):
                logger.debug("No function calls found in response. Loop finished.")
                return response

            logger.info(
                f"Loop {loop_index + 1}/{self._max_function_loops}: "
                f"resubmitting {len(outcome.results)} function response(s)."
            )
            current_request = current_request.with_contents(outcome.contents)
            response = await generator.generate_content(model, current_request)

        logger.warning(f"Max function loops ({self._max_function_loops}) reached. Stopping execution.")
        return response
