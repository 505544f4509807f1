"""Gemini client - function calling dispatch for the Gemini generateContent API."""

from .core import (
    ClientConfig,
    GeminiClientError,
    ConfigurationError,
    EmptyResponseError,
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    get_logger,
    setup_logging,
    FunctionHandler,
    SyncFunctionHandler,
    AsyncFunctionHandler,
    FunctionCallRequest,
    FunctionResult,
    HandlerRegistry,
    FunctionCallDispatcher,
    DispatchOutcome,
    Final,
    NeedsResubmission,
    FunctionCallingLoop,
)
from .core.types import (
    Content,
    Part,
    Role,
    TextPart,
    FunctionCallPart,
    FunctionResponsePart,
    InlineDataPart,
    FileDataPart,
    ExecutableCodePart,
    CodeExecutionResultPart,
    FunctionDeclaration,
    Tool,
    GenerateContentRequest,
    GenerateContentResponse,
)
from .gemini import GeminiClient

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
    "FunctionCallRequest",
    "FunctionResult",
    "HandlerRegistry",
    "FunctionCallDispatcher",
    "DispatchOutcome",
    "Final",
    "NeedsResubmission",
    "FunctionCallingLoop",
    "Content",
    "Part",
    "Role",
    "TextPart",
    "FunctionCallPart",
    "FunctionResponsePart",
    "InlineDataPart",
    "FileDataPart",
    "ExecutableCodePart",
    "CodeExecutionResultPart",
    "FunctionDeclaration",
    "Tool",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GeminiClient",
]
