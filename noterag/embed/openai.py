"""OpenAI-compatible embedding provider.

Works against OpenAI itself or any server exposing the same API, such as
Ollama's ``/v1`` endpoint.
"""

import structlog

from noterag.errors import ProviderError
from noterag.retry import provider_retrying

logger = structlog.get_logger(__name__)


class OpenAIEmbedder:
    """Embedding provider using an OpenAI-compatible embeddings endpoint.

    Makes one request per call: no batching, no caching.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str = "nomic-embed-text:latest",
        timeout: float = 120.0,
        max_attempts: int = 1,
        client=None,
    ):
        """Initialize embedder.

        Args:
            base_url: API base URL (OpenAI default if None)
            api_key: API key; local servers accept any value
            model: Embedding model name
            timeout: Request timeout in seconds
            max_attempts: Attempts per call, 1 disables retries
            client: Pre-built AsyncOpenAI-compatible client
        """
        self._base_url = base_url
        self._api_key = api_key
        self._model = model
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
                raise ProviderError(
                    "OpenAI-compatible embeddings require 'openai' package"
                ) from e
        return self._client

    @property
    def model_name(self) -> str:
        """Return model name."""
        return self._model

    async def embed(self, text: str) -> list[float]:
        """Generate the embedding for one text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector

        Raises:
            ProviderError: If the request fails or no embedding is returned
        """
        async for attempt in provider_retrying(self._max_attempts):
            with attempt:
                return await self._embed_once(text)

    async def _embed_once(self, text: str) -> list[float]:
        try:
            response = await self.client.embeddings.create(
                model=self._model,
                input=text,
            )
        except ProviderError:
            raise
        except Exception as e:
            logger.warning("embedding_request_failed", model=self._model, error=str(e))
            raise ProviderError(f"Embedding request failed: {e}") from e

        data = getattr(response, "data", None)
        if not data:
            raise ProviderError("Embedding service returned no embedding")

        embedding = data[0].embedding
        if not embedding:
            raise ProviderError("Embedding service returned an empty vector")

        return [float(x) for x in embedding]
