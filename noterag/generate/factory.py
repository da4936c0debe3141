"""Completer and answerer factories."""

from noterag.config import ProviderConfig, get_settings
from noterag.generate.answerer import Answerer
from noterag.generate.openai import OpenAICompleter
from noterag.protocols import Completer


def get_completer(config: ProviderConfig | None = None, **kwargs) -> Completer:
    """Create a completer from provider configuration.

    Args:
        config: Provider configuration (uses application settings if None)
        **kwargs: Overrides passed to the completer

    Returns:
        Completer instance
    """
    config = config or get_settings().provider

    options = {
        "base_url": config.base_url,
        "api_key": config.api_key,
        "model": config.completion_model,
        "temperature": config.completion_temperature,
        "timeout": config.timeout,
        "max_attempts": config.max_attempts,
    }
    options.update(kwargs)

    return OpenAICompleter(**options)


def get_answerer(config: ProviderConfig | None = None) -> Answerer:
    """Create an answerer backed by the configured completer."""
    return Answerer(completer=get_completer(config))
