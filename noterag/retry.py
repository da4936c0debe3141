"""Retry policy shared by provider clients."""

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from noterag.errors import ProviderError


def provider_retrying(max_attempts: int = 1) -> AsyncRetrying:
    """Build the retry controller for one provider call.

    Only ProviderError is retried; the last error is re-raised unchanged.
    With ``max_attempts=1`` the call is made exactly once.

    Args:
        max_attempts: Total attempts including the first one
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(ProviderError),
        reraise=True,
    )
