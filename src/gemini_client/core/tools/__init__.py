from .handlers import FunctionHandler, SyncFunctionHandler, AsyncFunctionHandler, ToolFunctionHandler
from .models import ToolDefinition, FunctionCallRequest, FunctionResult
from .registry import HandlerRegistry
from .execution import FunctionCallDispatcher, DispatchOutcome, Final, NeedsResubmission, FunctionCallingLoop
from .schema import SchemaValidator

__all__ = [
    "FunctionHandler",
    "SyncFunctionHandler",
    "AsyncFunctionHandler",
    "ToolFunctionHandler",
    "ToolDefinition",
    "FunctionCallRequest",
    "FunctionResult",
    "HandlerRegistry",
    "FunctionCallDispatcher",
    "DispatchOutcome",
    "Final",
    "NeedsResubmission",
    "FunctionCallingLoop",
    "SchemaValidator",
]
