import pytest
from typing import Any, Dict
from unittest.mock import MagicMock

from google.genai import errors, types

from gemini_client import (
    ClientConfig,
    Content,
    GeminiClient,
    GenerateContentRequest,
    HandlerRegistry,
)


def _text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def _call_response(name: str, args: Dict[str, Any]) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model", parts=[types.Part(function_call=types.FunctionCall(name=name, args=args))]
                )
            )
        ]
    )


def _request(text: str = "What's the current weather in London, UK?") -> GenerateContentRequest:
    return GenerateContentRequest(contents=[Content.from_text(text)])


def test_client_initialization(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    client = GeminiClient(client_config, aclient=mock_aclient)

    assert client.config is client_config
    assert client.aclient is mock_aclient


@pytest.mark.asyncio
async def test_generate_content(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    mock_aclient.models.generate_content.return_value = _text_response("Hello")
    client = GeminiClient(client_config, aclient=mock_aclient)

    response = await client.generate_content("gemini-2.5-pro", _request("Hi"))

    assert response.text == "Hello"
    kwargs = mock_aclient.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.5-pro"
    assert kwargs["contents"][0].parts[0].text == "Hi"


@pytest.mark.asyncio
async def test_generate_content_uses_default_model(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    mock_aclient.models.generate_content.return_value = _text_response("Hello")
    client = GeminiClient(client_config, aclient=mock_aclient)

    await client.generate_content(None, _request())

    assert mock_aclient.models.generate_content.call_args.kwargs["model"] == client_config.model


@pytest.mark.asyncio
async def test_function_calling_round_trip(
    client_config: ClientConfig, mock_aclient: MagicMock, weather_registry: HandlerRegistry
) -> None:
    mock_aclient.models.generate_content.side_effect = [
        _call_response("get_current_weather", {"location": "London, UK"}),
        _text_response("It is sunny and 20°C in London."),
    ]
    client = GeminiClient(client_config, aclient=mock_aclient)

    response = await client.generate_content_with_function_calling("gemini-2.5-flash", _request(), weather_registry)

    assert response.text == "It is sunny and 20°C in London."
    assert mock_aclient.models.generate_content.call_count == 2

    contents = mock_aclient.models.generate_content.call_args_list[1].kwargs["contents"]
    assert [content.role for content in contents] == ["user", "model", "user"]
    function_response = contents[2].parts[0].function_response
    assert function_response.name == "get_current_weather"
    assert function_response.response == {
        "weather": "The current weather in London, UK is sunny with a temperature of 20°C."
    }


@pytest.mark.asyncio
async def test_unregistered_function_is_reported_to_model(
    client_config: ClientConfig, mock_aclient: MagicMock, weather_registry: HandlerRegistry
) -> None:
    mock_aclient.models.generate_content.side_effect = [
        _call_response("get_time", {}),
        _text_response("Sorry, I cannot tell the time."),
    ]
    client = GeminiClient(client_config, aclient=mock_aclient)

    response = await client.generate_content_with_function_calling(None, _request("What time is it?"), weather_registry)

    assert response.text == "Sorry, I cannot tell the time."
    contents = mock_aclient.models.generate_content.call_args_list[1].kwargs["contents"]
    assert contents[2].parts[0].function_response.response == {"error": "no handler registered for get_time"}


@pytest.mark.asyncio
async def test_registry_declarations_are_attached(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    mock_aclient.models.generate_content.return_value = _text_response("ok")
    registry = HandlerRegistry()
    registry.register(
        "get_current_weather",
        lambda args: {},
        description="Get the current weather in a given location",
        parameters={"type": "OBJECT", "properties": {"location": {"type": "string"}}, "required": ["location"]},
    )
    request = _request()
    client = GeminiClient(client_config, aclient=mock_aclient)

    await client.generate_content_with_function_calling(None, request, registry)

    config = mock_aclient.models.generate_content.call_args.kwargs["config"]
    assert config.tools[0].function_declarations[0].name == "get_current_weather"
    assert request.tools is None


@pytest.mark.asyncio
async def test_transient_errors_are_retried(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    mock_aclient.models.generate_content.side_effect = [ConnectionError("reset"), _text_response("Recovered")]
    client = GeminiClient(client_config, aclient=mock_aclient)

    response = await client.generate_content(None, _request())

    assert response.text == "Recovered"
    assert mock_aclient.models.generate_content.call_count == 2


@pytest.mark.asyncio
async def test_last_error_is_raised_after_retries(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    mock_aclient.models.generate_content.side_effect = ConnectionError("Persistent Failure")
    client = GeminiClient(client_config, aclient=mock_aclient)

    with pytest.raises(ConnectionError, match="Persistent Failure"):
        await client.generate_content(None, _request())

    # initial call + 2 retries
    assert mock_aclient.models.generate_content.call_count == 3


@pytest.mark.asyncio
async def test_client_errors_are_not_retried(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    error = errors.ClientError(401, {"error": {"code": 401, "message": "API key not valid", "status": "UNAUTHENTICATED"}})
    mock_aclient.models.generate_content.side_effect = error
    client = GeminiClient(client_config, aclient=mock_aclient)

    with pytest.raises(errors.ClientError) as excinfo:
        await client.generate_content(None, _request())

    assert excinfo.value is error
    assert mock_aclient.models.generate_content.call_count == 1


@pytest.mark.asyncio
async def test_rate_limit_errors_are_retried(client_config: ClientConfig, mock_aclient: MagicMock) -> None:
    rate_limited = errors.ClientError(
        429, {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
    )
    mock_aclient.models.generate_content.side_effect = [rate_limited, _text_response("Recovered")]
    client = GeminiClient(client_config, aclient=mock_aclient)

    response = await client.generate_content(None, _request())

    assert response.text == "Recovered"
    assert mock_aclient.models.generate_content.call_count == 2
