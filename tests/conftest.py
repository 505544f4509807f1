import os
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import find_dotenv, load_dotenv

from gemini_client import ClientConfig, GenerateContentResponse, HandlerRegistry

# Recording tests need a real key from .env; everything else runs offline.
env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)


def get_current_weather(args: Dict[str, Any]) -> Dict[str, Any]:
    location = args.setdefault("location", "London, UK")
    return {"weather": f"The current weather in {location} is sunny with a temperature of 20°C."}


@pytest.fixture
def weather_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    registry.register("get_current_weather", get_current_weather)
    return registry


@pytest.fixture
def make_response() -> Callable[..., GenerateContentResponse]:
    """Build a single-candidate model response from raw wire parts."""

    def _make(*parts: Dict[str, Any]) -> GenerateContentResponse:
        return GenerateContentResponse.model_validate(
            {"candidates": [{"content": {"role": "model", "parts": list(parts)}, "finishReason": "STOP"}]}
        )

    return _make


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(api_key="test-key", max_retries=2, base_retry_delay=0.0)


@pytest.fixture
def mock_aclient() -> MagicMock:
    aclient = MagicMock()
    aclient.models.generate_content = AsyncMock()
    return aclient


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "once"),
        "match_on": ["method", "path", "query"],
        "filter_headers": [
            "authorization",
            "x-goog-api-key",
            "x-api-key",
            "api-key",
        ],
        "filter_query_parameters": ["key", "api_key", "access_token"],
        "decode_compressed_response": True,
    }
