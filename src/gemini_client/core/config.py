"""Client configuration."""

import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class ClientConfig(BaseModel):
    """Settings passed explicitly to ``GeminiClient``.

    Attributes:
        api_key: Gemini API key.
        model: Default model for requests that do not name one.
        max_retries: Extra attempts for failed API calls (4xx errors are never retried).
        base_retry_delay: Delay before the first retry, doubled on each attempt.
        handler_timeout: Seconds a single function handler may run. None disables the limit.
        max_function_loops: Maximum chained function-call rounds per request.
        concurrent_handlers: Run the asynchronous handlers of one response concurrently.
    """

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    model: str = DEFAULT_MODEL
    max_retries: int = Field(default=3, ge=0)
    base_retry_delay: float = Field(default=1.0, ge=0)
    handler_timeout: Optional[float] = Field(default=180.0, gt=0)
    max_function_loops: int = Field(default=5, ge=1)
    concurrent_handlers: bool = True

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: Any) -> "ClientConfig":
        """Build a config from the environment, loading a ``.env`` file first.

        Reads ``GEMINI_API_KEY`` (or ``GOOGLE_API_KEY``) and ``GEMINI_MODEL``.
        Variables already set in the environment win over the ``.env`` file.

        Args:
            dotenv_path: Explicit ``.env`` file. Searched from the working directory if omitted.
            **overrides: Field values taking precedence over the environment.

        Raises:
            ConfigurationError: If no API key is found.
        """
        env_file = dotenv_path or find_dotenv(usecwd=True)
        if env_file:
            logger.debug(f"Loading environment from {env_file}")
            load_dotenv(env_file)

        values: dict[str, Any] = {}
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if api_key:
            values["api_key"] = api_key
        model = os.getenv("GEMINI_MODEL")
        if model:
            values["model"] = model
        values.update(overrides)

        if not values.get("api_key"):
            msg = "GEMINI_API_KEY must be set (environment, .env file or explicit api_key)."
            logger.error(msg)
            raise ConfigurationError(msg)

        return cls(**values)
