"""Pytest configuration and fixtures."""

import pytest

from noterag.errors import GenerationError, ProviderError
from noterag.generate.answerer import Answerer
from noterag.models.note import Note, StoredNote
from noterag.retrieve.ranker import Ranker
from noterag.service import NoteService
from noterag.store.sqlite import SQLiteNoteStore


class FakeEmbedder:
    """Deterministic embedder returning preset vectors by text."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        error: Exception | None = None,
    ):
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.error = error
        self.calls: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-embedder"

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return list(self.vectors.get(text, self.default))


class FakeCompleter:
    """Completer recording prompts and returning a fixed answer."""

    def __init__(self, answer: str = "Paris in June.", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.prompts: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-llm"

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    """Embedder with no preset vectors."""
    return FakeEmbedder()


@pytest.fixture
def fake_completer() -> FakeCompleter:
    """Completer answering successfully."""
    return FakeCompleter()


@pytest.fixture
def failing_embedder() -> FakeEmbedder:
    """Embedder whose service is unreachable."""
    return FakeEmbedder(error=ProviderError("connection refused"))


@pytest.fixture
def failing_completer() -> FakeCompleter:
    """Completer whose service errors."""
    return FakeCompleter(error=GenerationError("model not loaded"))


@pytest.fixture
async def note_store(tmp_path) -> SQLiteNoteStore:
    """Initialized SQLite store in a temporary directory."""
    store = SQLiteNoteStore(tmp_path / "db" / "notes.db")
    await store.initialize()
    return store


@pytest.fixture
def make_service(note_store, fake_completer):
    """Build a NoteService over the temp store with a given embedder."""

    def _make(
        embedder: FakeEmbedder,
        completer: FakeCompleter | None = None,
        top_k: int = 10,
    ) -> NoteService:
        return NoteService(
            embedder=embedder,
            store=note_store,
            answerer=Answerer(completer or fake_completer),
            ranker=Ranker(top_k=top_k),
        )

    return _make


def stored(note_id: int, embedding: list[float], title: str | None = None) -> StoredNote:
    """Build a StoredNote for ranking tests."""
    return StoredNote(
        note=Note(
            id=note_id,
            title=title or f"Note {note_id}",
            content=f"Content {note_id}",
        ),
        embedding=embedding,
    )


@pytest.fixture
def make_stored():
    """Factory for StoredNote instances."""
    return stored
