"""
Exception hierarchy of the Gemini client.

Function-call failures raised here are turned into error payloads by the
dispatcher. Transport errors from ``google-genai`` are never wrapped and reach
the caller unchanged.
"""


class GeminiClientError(Exception):
    """Base exception for all errors raised by this library."""


class ConfigurationError(GeminiClientError):
    """Raised when the client configuration is incomplete or invalid."""


class EmptyResponseError(GeminiClientError):
    """Raised when a response has no candidate or the candidate has no parts."""


class LLMToolError(GeminiClientError):
    """Base exception for all function/tool related errors."""


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a function handler."""


class ToolNotFoundError(LLMToolError):
    """Raised when a requested function is not found in the registry."""


class ToolExecutionError(LLMToolError):
    """Raised when a function handler fails during execution."""


class ToolValidationError(LLMToolError):
    """Raised when function parameters or a declaration are invalid."""
