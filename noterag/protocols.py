"""Protocol definitions for pipeline collaborators.

These protocols define the capabilities the pipeline consumes, so that
tests can substitute deterministic fakes without network or disk access.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from noterag.models.note import Note, StoredNote


@runtime_checkable
class Embedder(Protocol):
    """Protocol for embedding providers.

    Embedders turn arbitrary text into a fixed-length vector.
    """

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Generate the embedding for one text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector

        Raises:
            ProviderError: If the service is unreachable or returns no embedding
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model name."""
        ...


@runtime_checkable
class Completer(Protocol):
    """Protocol for text completion providers."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send a single prompt and return the generated text.

        Args:
            prompt: Complete prompt text

        Returns:
            Generated text

        Raises:
            GenerationError: If the service errors or returns no usable output
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model name."""
        ...


@runtime_checkable
class NoteStore(Protocol):
    """Protocol for note persistence.

    Pure data access: stores and returns notes with their embeddings,
    no ranking logic.
    """

    @abstractmethod
    async def save(self, title: str, content: str, embedding: list[float]) -> int:
        """Persist a note and its embedding atomically.

        Returns:
            The new note id

        Raises:
            StorageError: If the write fails
        """
        ...

    @abstractmethod
    async def list(self) -> list[Note]:
        """Return all notes in insertion order, without embeddings."""
        ...

    @abstractmethod
    async def all_with_embeddings(self) -> list[StoredNote]:
        """Return every note whose embedding can be decoded."""
        ...

    @abstractmethod
    async def delete(self, note_id: int) -> None:
        """Delete a note. Missing ids are ignored.

        Raises:
            StorageError: If the delete cannot be performed
        """
        ...
