"""Wire-level data model: content parts, requests and responses."""

from .content import (
    WireModel,
    Role,
    Blob,
    FileData,
    FunctionCall,
    FunctionResponse,
    ExecutableCode,
    CodeExecutionResult,
    TextPart,
    FunctionCallPart,
    FunctionResponsePart,
    InlineDataPart,
    FileDataPart,
    ExecutableCodePart,
    CodeExecutionResultPart,
    Part,
    Content,
)
from .models import (
    FunctionDeclaration,
    Tool,
    FunctionCallingConfig,
    ToolConfig,
    GenerationConfig,
    GenerateContentRequest,
    Candidate,
    UsageMetadata,
    PromptFeedback,
    GenerateContentResponse,
)

__all__ = [
    "WireModel",
    "Role",
    "Blob",
    "FileData",
    "FunctionCall",
    "FunctionResponse",
    "ExecutableCode",
    "CodeExecutionResult",
    "TextPart",
    "FunctionCallPart",
    "FunctionResponsePart",
    "InlineDataPart",
    "FileDataPart",
    "ExecutableCodePart",
    "CodeExecutionResultPart",
    "Part",
    "Content",
    "FunctionDeclaration",
    "Tool",
    "FunctionCallingConfig",
    "ToolConfig",
    "GenerationConfig",
    "GenerateContentRequest",
    "Candidate",
    "UsageMetadata",
    "PromptFeedback",
    "GenerateContentResponse",
]
