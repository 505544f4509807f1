"""Function registration and dispatch data models."""

from .models import ToolDefinition
from .tool_call import FunctionCallRequest, FunctionResult

__all__ = ["ToolDefinition", "FunctionCallRequest", "FunctionResult"]
