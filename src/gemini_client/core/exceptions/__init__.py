"""Export the exception hierarchy used across configuration, dispatch and transport."""

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

__all__ = [
    "GeminiClientError",
    "ConfigurationError",
    "EmptyResponseError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
]
