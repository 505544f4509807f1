"""Public exports for the core data model, function dispatch and utilities."""

from .config import ClientConfig
from .exceptions import (
    GeminiClientError,
    ConfigurationError,
    EmptyResponseError,
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
)
from .logger import get_logger, setup_logging
from .tools import (
    FunctionHandler,
    SyncFunctionHandler,
    AsyncFunctionHandler,
    ToolFunctionHandler,
    ToolDefinition,
    FunctionCallRequest,
    FunctionResult,
    HandlerRegistry,
    FunctionCallDispatcher,
    DispatchOutcome,
    Final,
    NeedsResubmission,
    FunctionCallingLoop,
    SchemaValidator,
)

__all__ = [
    "ClientConfig",
    "GeminiClientError",
    "ConfigurationError",
    "EmptyResponseError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "get_logger",
    "setup_logging",
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
