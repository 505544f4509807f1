"""Content parts exchanged with the Gemini API.

A part carries exactly one payload. ``Part`` is a closed union with one model per
payload kind; the variant is picked from whichever payload key is present, and a
part with no payload or with several payloads is rejected during validation.
"""

from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models that mirror the camelCase JSON of the REST API.

    Fields are declared in snake_case and accept either spelling on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> Dict[str, Any]:
        """Dump the model to its JSON wire form (camelCase keys, no nulls)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Role(str, Enum):
    """Author of a content block."""

    USER = "user"
    MODEL = "model"
    FUNCTION = "function"


class Blob(WireModel):
    """Inline binary data, base64 encoded."""

    mime_type: str
    data: str


class FileData(WireModel):
    """Reference to a file uploaded to the Files API or to a URI."""

    mime_type: Optional[str] = None
    file_uri: str


class FunctionCall(WireModel):
    """A function call issued by the model."""

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None


class FunctionResponse(WireModel):
    """The result of a function call, sent back to the model."""

    name: str
    response: Dict[str, Any]
    id: Optional[str] = None


class ExecutableCode(WireModel):
    """Code generated by the model for the code execution tool."""

    language: str = "PYTHON"
    code: str


class CodeExecutionResult(WireModel):
    """Outcome of running ``ExecutableCode``."""

    outcome: str
    output: Optional[str] = None


class _PartBase(WireModel):
    kind: ClassVar[str]

    thought: Optional[bool] = None
    thought_signature: Optional[str] = None


class TextPart(_PartBase):
    kind: ClassVar[str] = "text"
    text: str


class FunctionCallPart(_PartBase):
    kind: ClassVar[str] = "function_call"
    function_call: FunctionCall


class FunctionResponsePart(_PartBase):
    kind: ClassVar[str] = "function_response"
    function_response: FunctionResponse


class InlineDataPart(_PartBase):
    kind: ClassVar[str] = "inline_data"
    inline_data: Blob


class FileDataPart(_PartBase):
    kind: ClassVar[str] = "file_data"
    file_data: FileData


class ExecutableCodePart(_PartBase):
    kind: ClassVar[str] = "executable_code"
    executable_code: ExecutableCode


class CodeExecutionResultPart(_PartBase):
    kind: ClassVar[str] = "code_execution_result"
    code_execution_result: CodeExecutionResult


_PART_TYPES = (
    TextPart,
    FunctionCallPart,
    FunctionResponsePart,
    InlineDataPart,
    FileDataPart,
    ExecutableCodePart,
    CodeExecutionResultPart,
)

# Both spellings of every payload key, mapped to the variant tag.
_PAYLOAD_KEYS: Dict[str, str] = {}
for _part_type in _PART_TYPES:
    _PAYLOAD_KEYS[_part_type.kind] = _part_type.kind
    _PAYLOAD_KEYS[to_camel(_part_type.kind)] = _part_type.kind


def payload_kinds(value: Dict[str, Any]) -> Set[str]:
    """Variant tags of all payload keys present in a raw part dict."""
    return {_PAYLOAD_KEYS[key] for key, payload in value.items() if key in _PAYLOAD_KEYS and payload is not None}


def part_kind(value: Any) -> Optional[str]:
    """Return the variant tag of a part (model or raw dict), or None unless it has exactly one payload."""
    if isinstance(value, _PartBase):
        return value.kind
    if not isinstance(value, dict):
        return None

    kinds = payload_kinds(value)
    if len(kinds) != 1:
        return None
    return kinds.pop()


Part = Annotated[
    Union[
        Annotated[TextPart, Tag("text")],
        Annotated[FunctionCallPart, Tag("function_call")],
        Annotated[FunctionResponsePart, Tag("function_response")],
        Annotated[InlineDataPart, Tag("inline_data")],
        Annotated[FileDataPart, Tag("file_data")],
        Annotated[ExecutableCodePart, Tag("executable_code")],
        Annotated[CodeExecutionResultPart, Tag("code_execution_result")],
    ],
    Discriminator(
        part_kind,
        custom_error_type="invalid_part",
        custom_error_message="A content part must carry exactly one payload",
    ),
]


class Content(WireModel):
    """One role-tagged turn of a conversation.

    Attributes:
        role: Author of the turn. Optional on system instructions.
        parts: Ordered payload of the turn.
    """

    role: Optional[Role] = None
    parts: List[Part] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, role: Role = Role.USER) -> "Content":
        """Build a single text part content block."""
        return cls(role=role, parts=[TextPart(text=text)])

    @property
    def text(self) -> str:
        """Concatenated text of all non-thought text parts."""
        return "".join(part.text for part in self.parts if isinstance(part, TextPart) and not part.thought)

    @property
    def function_calls(self) -> List[FunctionCall]:
        """Function calls in order of appearance."""
        return [part.function_call for part in self.parts if isinstance(part, FunctionCallPart)]
