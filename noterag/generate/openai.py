"""OpenAI-compatible completion provider."""

import structlog

from noterag.errors import GenerationError
from noterag.retry import provider_retrying

logger = structlog.get_logger(__name__)


class OpenAICompleter:
    """Completion provider using an OpenAI-compatible chat endpoint.

    The prompt is sent as a single user message; no conversation state
    is kept between calls.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str = "llama3.2:3b",
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float = 120.0,
        max_attempts: int = 1,
        client=None,
    ):
        """Initialize completer.

        Args:
            base_url: API base URL (OpenAI default if None)
            api_key: API key; local servers accept any value
            model: Model name to use
            temperature: Sampling temperature (server default if None)
            max_tokens: Maximum tokens in response (server default if None)
            timeout: Request timeout in seconds
            max_attempts: Attempts per call, 1 disables retries
            client: Pre-built AsyncOpenAI-compatible client
        """
        self._base_url = base_url
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client = client

    @property
    def client(self):
        """Lazy load OpenAI client."""
        if self._client is None:
            try:
                from openai import AsyncOpenAI

                self._client = AsyncOpenAI(
                    base_url=self._base_url,
                    api_key=self._api_key,
                    timeout=self._timeout,
                )
            except ImportError as e:
                raise GenerationError(
                    "OpenAI-compatible generation requires 'openai' package"
                ) from e
        return self._client

    @property
    def model_name(self) -> str:
        """Return model name."""
        return self._model

    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the generated text unmodified.

        Args:
            prompt: Complete prompt text

        Returns:
            Generated text

        Raises:
            GenerationError: If the request fails or the response has no text
        """
        async for attempt in provider_retrying(self._max_attempts):
            with attempt:
                return await self._complete_once(prompt)

    async def _complete_once(self, prompt: str) -> str:
        kwargs = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self._temperature is not None:
            kwargs["temperature"] = self._temperature
        if self._max_tokens is not None:
            kwargs["max_tokens"] = self._max_tokens

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except GenerationError:
            raise
        except Exception as e:
            logger.warning("completion_request_failed", model=self._model, error=str(e))
            raise GenerationError(f"Completion request failed: {e}") from e

        choices = getattr(response, "choices", None)
        if not choices:
            raise GenerationError("Completion service returned no choices")

        text = choices[0].message.content
        if not text or not text.strip():
            raise GenerationError("Completion service returned an empty answer")

        return text
