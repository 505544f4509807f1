import pytest
from pydantic import ValidationError

from gemini_client import (
    CodeExecutionResultPart,
    Content,
    EmptyResponseError,
    ExecutableCodePart,
    FileDataPart,
    FunctionCallPart,
    FunctionResponsePart,
    GenerateContentRequest,
    GenerateContentResponse,
    InlineDataPart,
    Role,
    TextPart,
)


def _describe(content: Content) -> list[str]:
    kinds = []
    for part in content.parts:
        match part:
            case TextPart():
                kinds.append("text")
            case FunctionCallPart():
                kinds.append("function_call")
            case FunctionResponsePart():
                kinds.append("function_response")
            case InlineDataPart():
                kinds.append("inline_data")
            case FileDataPart():
                kinds.append("file_data")
            case ExecutableCodePart():
                kinds.append("executable_code")
            case CodeExecutionResultPart():
                kinds.append("code_execution_result")
    return kinds


def test_every_part_variant_is_parsed() -> None:
    content = Content.model_validate(
        {
            "role": "model",
            "parts": [
                {"text": "hi"},
                {"functionCall": {"name": "f", "args": {"x": 1}}},
                {"functionResponse": {"name": "f", "response": {"ok": True}}},
                {"inlineData": {"mimeType": "image/png", "data": "iVBORw=="}},
                {"fileData": {"mimeType": "application/pdf", "fileUri": "gs://bucket/doc.pdf"}},
                {"executableCode": {"language": "PYTHON", "code": "print(1)"}},
                {"codeExecutionResult": {"outcome": "OUTCOME_OK", "output": "1\n"}},
            ],
        }
    )

    assert content.role == Role.MODEL
    assert _describe(content) == [
        "text",
        "function_call",
        "function_response",
        "inline_data",
        "file_data",
        "executable_code",
        "code_execution_result",
    ]


def test_snake_case_keys_are_accepted() -> None:
    content = Content.model_validate({"parts": [{"function_call": {"name": "f", "args": {}}}]})
    assert isinstance(content.parts[0], FunctionCallPart)


def test_part_without_payload_is_rejected() -> None:
    with pytest.raises(ValidationError, match="exactly one payload"):
        Content.model_validate({"role": "model", "parts": [{"thought": True}]})


def test_part_with_two_payloads_is_rejected() -> None:
    with pytest.raises(ValidationError, match="exactly one payload"):
        Content.model_validate({"parts": [{"text": "a", "functionCall": {"name": "f"}}]})


def test_to_wire_uses_camel_case_and_drops_nulls() -> None:
    content = Content.model_validate(
        {"role": "model", "parts": [{"functionCall": {"name": "f", "args": {"a": 1}}, "thoughtSignature": "c2ln"}]}
    )

    assert content.to_wire() == {
        "role": "model",
        "parts": [{"functionCall": {"name": "f", "args": {"a": 1}}, "thoughtSignature": "c2ln"}],
    }


def test_function_call_args_default_to_empty_dict() -> None:
    content = Content.model_validate({"parts": [{"functionCall": {"name": "f"}}]})
    assert content.function_calls[0].args == {}


def test_content_text_skips_thoughts_and_other_parts() -> None:
    content = Content.model_validate(
        {
            "parts": [
                {"text": "thinking...", "thought": True},
                {"text": "Hello"},
                {"functionCall": {"name": "f"}},
                {"text": " world"},
            ]
        }
    )
    assert content.text == "Hello world"


def test_request_accepts_rest_document() -> None:
    request = GenerateContentRequest.model_validate(
        {
            "contents": [{"role": "user", "parts": [{"text": "What's the weather?"}]}],
            "tools": [
                {
                    "functionDeclarations": [
                        {
                            "name": "get_current_weather",
                            "description": "Get the current weather in a given location",
                            "parameters": {
                                "type": "OBJECT",
                                "properties": {"location": {"type": "string"}},
                                "required": ["location"],
                            },
                        }
                    ]
                }
            ],
        }
    )

    assert [decl.name for decl in request.function_declarations] == ["get_current_weather"]
    assert request.function_declarations[0].parameters["required"] == ["location"]


def test_with_contents_returns_copy() -> None:
    request = GenerateContentRequest(contents=[Content.from_text("hi")])
    extended = request.with_contents([Content.from_text("there", role=Role.MODEL)])

    assert len(request.contents) == 1
    assert len(extended.contents) == 2
    assert extended.contents[1].role == Role.MODEL


def test_first_part_of_response() -> None:
    response = GenerateContentResponse.model_validate(
        {"candidates": [{"content": {"role": "model", "parts": [{"text": "Hello"}]}}]}
    )
    assert response.first_part() == TextPart(text="Hello")
    assert response.text == "Hello"


def test_empty_candidates_raise_empty_response_error() -> None:
    response = GenerateContentResponse.model_validate({"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}})

    assert response.text == ""
    with pytest.raises(EmptyResponseError, match="SAFETY"):
        response.first_candidate()


def test_candidate_without_parts_raises_empty_response_error() -> None:
    response = GenerateContentResponse.model_validate({"candidates": [{"finishReason": "MAX_TOKENS"}]})

    with pytest.raises(EmptyResponseError, match="MAX_TOKENS"):
        response.first_part()


def test_function_calls_come_from_first_calling_candidate() -> None:
    response = GenerateContentResponse.model_validate(
        {
            "candidates": [
                {"content": {"parts": [{"text": "thinking"}]}},
                {"content": {"parts": [{"functionCall": {"name": "a"}}, {"functionCall": {"name": "b"}}]}},
                {"content": {"parts": [{"text": "x"}, {"functionCall": {"name": "c"}}]}},
            ]
        }
    )

    candidate = response.calling_candidate()

    assert candidate is response.candidates[1]
    assert [call.name for call in response.function_calls] == ["a", "b"]


def test_text_only_response_has_no_calling_candidate() -> None:
    response = GenerateContentResponse.model_validate({"candidates": [{"content": {"parts": [{"text": "hi"}]}}]})

    assert response.calling_candidate() is None
    assert response.function_calls == []
