"""Routes the function calls of a model response to registered handlers."""

from __future__ import annotations

import asyncio
import copy
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union, assert_never

from ..models import FunctionCallRequest, FunctionResult
from ..registry import HandlerRegistry
from ...exceptions import ToolExecutionError
from ...logger import get_logger
from ...types import (
    CodeExecutionResultPart,
    Content,
    ExecutableCodePart,
    FileDataPart,
    FunctionCallPart,
    FunctionResponse,
    FunctionResponsePart,
    GenerateContentResponse,
    InlineDataPart,
    Role,
    TextPart,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Final:
    """The response requested no function call; it is the model's answer."""

    response: GenerateContentResponse

    @property
    def content(self) -> Optional[Content]:
        """Content of the first candidate, unchanged."""
        if not self.response.candidates:
            return None
        return self.response.candidates[0].content

    @property
    def text(self) -> str:
        return self.response.text


@dataclass(frozen=True)
class NeedsResubmission:
    """Function calls were handled; the conversation must continue.

    Attributes:
        model_content: The model turn that issued the calls.
        follow_up: One function-response part per call, in call order.
        results: The handler outcomes, aligned with ``follow_up.parts``.
    """

    model_content: Content
    follow_up: Content
    results: List[FunctionResult] = field(default_factory=list)

    @property
    def contents(self) -> List[Content]:
        """The two turns to append to the history before resubmitting."""
        return [self.model_content, self.follow_up]


DispatchOutcome = Union[Final, NeedsResubmission]


class FunctionCallDispatcher:
    """Executes the function calls of a response and builds the follow-up content.

    The dispatcher keeps no conversation state, so one instance can serve any
    number of concurrent conversations and arbitrarily long call chains.

    Unknown functions and failing handlers never raise: they become error
    results, so the model is told what went wrong and the conversation goes on.
    Cancellation is propagated to in-flight handlers.
    """

    def __init__(self, *, handler_timeout: Optional[float] = 180.0, concurrent: bool = True) -> None:
        """Initialize the dispatcher.

        Args:
            handler_timeout: Seconds a single handler may run, or None for no limit.
                             Only asynchronous handlers can be interrupted.
            concurrent: Run asynchronous handlers of one response concurrently.
        """
        self._handler_timeout = handler_timeout
        self._concurrent = concurrent

    @staticmethod
    def extract_calls(content: Content) -> List[FunctionCallRequest]:
        """Collect the function calls of one content block, in order of appearance."""
        calls: List[FunctionCallRequest] = []
        for part in content.parts:
            match part:
                case FunctionCallPart(function_call=call):
                    calls.append(FunctionCallRequest(name=call.name, arguments=call.args, call_id=call.id))
                case (
                    TextPart()
                    | FunctionResponsePart()
                    | InlineDataPart()
                    | FileDataPart()
                    | ExecutableCodePart()
                    | CodeExecutionResultPart()
                ):
                    continue
                case _:
                    assert_never(part)
        return calls

    async def dispatch(self, response: GenerateContentResponse, registry: HandlerRegistry) -> DispatchOutcome:
        """Run one dispatch cycle over ``response``.

        Only the first candidate that holds function calls is handled, so the
        follow-up answers exactly the calls of the model turn it is paired with.

        Args:
            response: The model response to inspect.
            registry: Handlers to route calls to. Must not be modified during the call.

        Returns:
            ``Final`` if the response holds no function call, otherwise
            ``NeedsResubmission`` with one function response per call.
        """
        candidate = response.calling_candidate()
        if candidate is None or candidate.content is None:
            logger.debug("No function calls found in response.")
            return Final(response)

        model_content = candidate.content
        if model_content.role is None:
            model_content = model_content.model_copy(update={"role": Role.MODEL})

        calls = self.extract_calls(model_content)
        logger.info(f"Dispatching {len(calls)} function call(s).")
        results = await self.execute(calls, registry)

        follow_up = Content(
            role=Role.USER,
            parts=[
                FunctionResponsePart(
                    function_response=FunctionResponse(name=result.name, response=result.response, id=result.call_id)
                )
                for result in results
            ],
        )
        return NeedsResubmission(model_content=model_content, follow_up=follow_up, results=results)

    async def execute(self, calls: Sequence[FunctionCallRequest], registry: HandlerRegistry) -> List[FunctionResult]:
        """Invoke the handler of every call and return the results in call order."""
        if self._concurrent:
            # Tasks start in creation order; sync handlers never yield, so they still run in call order.
            return list(await asyncio.gather(*(self._handle_call(call, registry) for call in calls)))

        results = []
        for call in calls:
            results.append(await self._handle_call(call, registry))
        return results

    async def _handle_call(self, call: FunctionCallRequest, registry: HandlerRegistry) -> FunctionResult:
        handler = registry.get(call.name)
        if handler is None:
            msg = f"no handler registered for {call.name}"
            logger.warning(msg)
            return FunctionResult(name=call.name, error=msg, call_id=call.call_id)

        args = copy.deepcopy(call.arguments) if call.arguments else {}
        try:
            logger.info(f"Executing function '{call.name}'...")
            if self._handler_timeout is None:
                value = await handler.invoke(args)
            else:
                value = await asyncio.wait_for(handler.invoke(args), timeout=self._handler_timeout)
        except asyncio.TimeoutError:
            exc = ToolExecutionError(f"Handler timed out after {self._handler_timeout} seconds.")
            logger.warning(f"Function '{call.name}' failed: {exc}")
            return FunctionResult(name=call.name, error=f"{type(exc).__name__}: {exc}", call_id=call.call_id)
        except Exception as exc:
            logger.warning(f"Function '{call.name}' failed: {exc} ({type(exc).__name__})", exc_info=True)
            return FunctionResult(name=call.name, error=f"{type(exc).__name__}: {exc}", call_id=call.call_id)

        logger.info(f"Function '{call.name}' executed successfully.")
        return FunctionResult(name=call.name, value=value, call_id=call.call_id)
