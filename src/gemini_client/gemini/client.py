import asyncio
from typing import Any, Callable, Coroutine, Optional, TypeVar

from google.genai import errors
from google.genai.client import AsyncClient, Client

from ..core.config import ClientConfig
from ..core.logger import get_logger
from ..core.tools import FunctionCallDispatcher, FunctionCallingLoop, HandlerRegistry
from ..core.types import GenerateContentRequest, GenerateContentResponse
from .adapter import GenAIRequestAdapter

logger = get_logger(__name__)

T = TypeVar("T")

# RESOURCE_EXHAUSTED is the only client error that is retried.
RATE_LIMIT_STATUS = 429


class GeminiClient:
    """
    Async client for the Gemini ``generateContent`` API with function calling.

    Transport and authentication are handled by the ``google-genai`` SDK. Failed
    calls are retried with exponential backoff, except client errors (4xx) other than
    429 rate limits, and the last error is re-raised unchanged.
    """

    def __init__(self, config: ClientConfig, aclient: Optional[AsyncClient] = None) -> None:
        """
        Initializes the client.

        Args:
            config: Explicit client configuration.
            aclient: An initialized ``google.genai`` async client. Built from
                     ``config.api_key`` when omitted.
        """
        self.config = config
        self.aclient: AsyncClient = aclient or Client(api_key=config.api_key.get_secret_value()).aio
        self.dispatcher = FunctionCallDispatcher(
            handler_timeout=config.handler_timeout,
            concurrent=config.concurrent_handlers,
        )
        self._loop = FunctionCallingLoop(dispatcher=self.dispatcher, max_function_loops=config.max_function_loops)
        logger.info(
            f"Initialized GeminiClient with model='{config.model}', max_retries={config.max_retries}, "
            f"max_function_loops={config.max_function_loops}"
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeminiClient":
        """Build a client from ``ClientConfig.from_env``."""
        return cls(ClientConfig.from_env(**overrides))

    async def generate_content(
        self, model: Optional[str], request: GenerateContentRequest
    ) -> GenerateContentResponse:
        """
        Sends a single request to the model.

        Args:
            model: Model name, e.g. 'gemini-2.5-flash'. Falls back to ``config.model``.
            request: The request to send.

        Returns:
            The model response.
        """
        model = model or self.config.model
        logger.debug(f"Sending request to Gemini (model={model}) with {len(request.contents)} content(s).")
        return await self._execute_with_retry(self._generate_content_impl, model, request)

    async def generate_content_with_function_calling(
        self,
        model: Optional[str],
        request: GenerateContentRequest,
        registry: HandlerRegistry,
    ) -> GenerateContentResponse:
        """
        Sends a request and resolves function calls until the model returns its answer.

        Function calls are routed to ``registry``; their results are resubmitted
        together with the full prior history. If the request declares no tools,
        the registry's declarations are attached.

        Args:
            model: Model name. Falls back to ``config.model``.
            request: The initial request. It is not modified.
            registry: Handlers for the functions the model may call.

        Returns:
            The final response, or the last one when ``max_function_loops`` is reached.
        """
        model = model or self.config.model
        if not request.tools and registry.tool_object is not None:
            request = request.model_copy(update={"tools": [registry.tool_object]})
            logger.debug(f"Attached {len(registry.declarations)} declaration(s) from the registry.")

        return await self._loop.run(model=model, request=request, registry=registry, generator=self)

    async def _generate_content_impl(self, model: str, request: GenerateContentRequest) -> GenerateContentResponse:
        contents, config = GenAIRequestAdapter.to_genai(request)
        try:
            raw = await self.aclient.models.generate_content(model=model, contents=contents, config=config)
        except Exception as e:
            logger.error(f"Error sending request to Gemini: {e}", exc_info=True)
            raise
        return GenAIRequestAdapter.from_genai(raw)

    async def _execute_with_retry(self, func: Callable[..., Coroutine[Any, Any, T]], *args: Any) -> T:
        """
        Executes a coroutine function with retry logic.

        Raises:
            errors.ClientError: Immediately for 4xx errors other than 429, since they
                                will not succeed on retry.
            Exception: The last encountered exception if all retries fail.
        """
        delay = self.config.base_retry_delay
        for attempt in range(self.config.max_retries + 1):
            try:
                return await func(*args)
            except Exception as e:
                if isinstance(e, errors.ClientError) and e.code != RATE_LIMIT_STATUS:
                    raise
                if attempt == self.config.max_retries:
                    raise

                logger.warning(f"API Error (Retry: {attempt + 1}/{self.config.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)
                delay *= 2

        msg = f"Failed to get response after {self.config.max_retries} retries."
        logger.error(msg)
        raise TimeoutError(msg)
