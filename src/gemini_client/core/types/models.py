"""Request and response models for ``generateContent``."""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import ConfigDict, Field

from .content import Content, FunctionCall, Part, WireModel
from ..exceptions import EmptyResponseError


class FunctionDeclaration(WireModel):
    """Declaration of a function the model may call.

    Attributes:
        name: Unique function name within a request.
        description: What the function does, written for the model.
        parameters: JSON-schema-shaped object with ``type``, ``properties`` and ``required``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    parameters: Optional[Dict[str, Any]] = None


class Tool(WireModel):
    """A tool entry of a request; only function declarations are interpreted locally."""

    function_declarations: Optional[List[FunctionDeclaration]] = None
    code_execution: Optional[Dict[str, Any]] = None
    google_search: Optional[Dict[str, Any]] = None


class FunctionCallingConfig(WireModel):
    mode: Optional[str] = None
    allowed_function_names: Optional[List[str]] = None


class ToolConfig(WireModel):
    function_calling_config: Optional[FunctionCallingConfig] = None


class GenerationConfig(WireModel):
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[float] = None
    candidate_count: Optional[int] = None
    max_output_tokens: Optional[int] = None
    stop_sequences: Optional[List[str]] = None
    response_mime_type: Optional[str] = None
    seed: Optional[int] = None


class GenerateContentRequest(WireModel):
    """Body of a ``generateContent`` call.

    Accepts the REST JSON document directly::

        GenerateContentRequest.model_validate({"contents": [...], "tools": [...]})
    """

    contents: List[Content]
    tools: Optional[List[Tool]] = None
    tool_config: Optional[ToolConfig] = None
    system_instruction: Optional[Content] = None
    generation_config: Optional[GenerationConfig] = None

    def with_contents(self, extra: Sequence[Content]) -> "GenerateContentRequest":
        """Return a copy with ``extra`` appended to the conversation history."""
        return self.model_copy(update={"contents": [*self.contents, *extra]})

    @property
    def function_declarations(self) -> List[FunctionDeclaration]:
        """All function declarations across the request's tools."""
        return [decl for tool in self.tools or [] for decl in tool.function_declarations or []]


class Candidate(WireModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = None
    index: Optional[int] = None


class UsageMetadata(WireModel):
    prompt_token_count: Optional[int] = None
    candidates_token_count: Optional[int] = None
    total_token_count: Optional[int] = None
    thoughts_token_count: Optional[int] = None
    tool_use_prompt_token_count: Optional[int] = None


class PromptFeedback(WireModel):
    block_reason: Optional[str] = None
    block_reason_message: Optional[str] = None


class GenerateContentResponse(WireModel):
    """Response of a ``generateContent`` call."""

    candidates: List[Candidate] = Field(default_factory=list)
    usage_metadata: Optional[UsageMetadata] = None
    prompt_feedback: Optional[PromptFeedback] = None
    model_version: Optional[str] = None
    response_id: Optional[str] = None

    def first_candidate(self) -> Candidate:
        """Return the first candidate.

        Raises:
            EmptyResponseError: If the response has no candidates, e.g. a blocked prompt.
        """
        if not self.candidates:
            reason = self.prompt_feedback.block_reason if self.prompt_feedback else None
            msg = "Response contains no candidates"
            if reason:
                msg += f" (prompt blocked: {reason})"
            raise EmptyResponseError(msg)
        return self.candidates[0]

    def first_part(self) -> Part:
        """Return the first part of the first candidate.

        Raises:
            EmptyResponseError: If there is no candidate or its content has no parts.
        """
        candidate = self.first_candidate()
        if candidate.content is None or not candidate.content.parts:
            raise EmptyResponseError(f"First candidate has no content parts (finish reason: {candidate.finish_reason})")
        return candidate.content.parts[0]

    @property
    def text(self) -> str:
        """Text of the first candidate, or an empty string."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return self.candidates[0].content.text

    def calling_candidate(self) -> Optional[Candidate]:
        """Return the first candidate whose content holds function calls, if any."""
        for candidate in self.candidates:
            if candidate.content is not None and candidate.content.function_calls:
                return candidate
        return None

    @property
    def function_calls(self) -> List[FunctionCall]:
        """Function calls of the first calling candidate, in order of appearance."""
        candidate = self.calling_candidate()
        if candidate is None or candidate.content is None:
            return []
        return candidate.content.function_calls
