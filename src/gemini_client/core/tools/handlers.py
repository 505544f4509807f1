"""Function handlers.

Every handler exposes a single coroutine, ``invoke(args)``. Synchronous handlers
complete without suspending, asynchronous ones may suspend while they await
external work. The dispatcher only ever talks to this interface.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import ToolValidationError

SyncHandlerFunc = Callable[[Dict[str, Any]], Any]
AsyncHandlerFunc = Callable[[Dict[str, Any]], Awaitable[Any]]


class FunctionHandler(ABC):
    """Interface of anything the dispatcher can invoke for a function call."""

    @abstractmethod
    async def invoke(self, args: Dict[str, Any]) -> Any:
        """Run the handler.

        Args:
            args: A private, mutable copy of the model-supplied arguments. Handlers
                  may fill in defaults for missing fields.

        Returns:
            A JSON-like value. A dict is sent to the model as-is, anything else is
            wrapped as ``{"result": value}``.
        """

    @staticmethod
    def from_callable(func: Union["FunctionHandler", SyncHandlerFunc, AsyncHandlerFunc]) -> "FunctionHandler":
        """Wrap a plain ``func(args)`` callable in the matching handler variant."""
        if isinstance(func, FunctionHandler):
            return func
        if inspect.iscoroutinefunction(func):
            return AsyncFunctionHandler(func)
        return SyncFunctionHandler(func)


class SyncFunctionHandler(FunctionHandler):
    """Runs a regular function on the event loop thread, without suspending."""

    def __init__(self, func: SyncHandlerFunc) -> None:
        self.func = func

    async def invoke(self, args: Dict[str, Any]) -> Any:
        return self.func(args)


class AsyncFunctionHandler(FunctionHandler):
    """Awaits a coroutine function."""

    def __init__(self, func: AsyncHandlerFunc) -> None:
        self.func = func

    async def invoke(self, args: Dict[str, Any]) -> Any:
        return await self.func(args)


class ToolFunctionHandler(FunctionHandler):
    """Calls an annotated Python function with its arguments as keywords.

    Arguments are validated and coerced by ``args_model`` first, when one is given.
    Works for both plain and ``async def`` functions.
    """

    def __init__(self, func: Callable[..., Any], args_model: Optional[Type[BaseModel]] = None) -> None:
        self.func = func
        self.args_model = args_model

    async def invoke(self, args: Dict[str, Any]) -> Any:
        kwargs = args
        if self.args_model is not None:
            try:
                kwargs = dict(self.args_model(**args))
            except ValidationError as exc:
                raise ToolValidationError(f"Argument validation failed: {exc}") from exc

        result = self.func(**kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result
