"""Embedder factory."""

from noterag.config import ProviderConfig, get_settings
from noterag.embed.openai import OpenAIEmbedder
from noterag.protocols import Embedder


def get_embedder(config: ProviderConfig | None = None, **kwargs) -> Embedder:
    """Create an embedder from provider configuration.

    Args:
        config: Provider configuration (uses application settings if None)
        **kwargs: Overrides passed to the embedder

    Returns:
        Embedder instance
    """
    config = config or get_settings().provider

    options = {
        "base_url": config.base_url,
        "api_key": config.api_key,
        "model": config.embedding_model,
        "timeout": config.timeout,
        "max_attempts": config.max_attempts,
    }
    options.update(kwargs)

    return OpenAIEmbedder(**options)
