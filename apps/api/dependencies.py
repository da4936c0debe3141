"""FastAPI dependency injection providers."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from noterag.config import get_settings
from noterag.embed.factory import get_embedder
from noterag.generate.answerer import Answerer
from noterag.generate.factory import get_answerer
from noterag.protocols import Embedder
from noterag.retrieve.ranker import Ranker
from noterag.service import NoteService
from noterag.store.factory import get_note_store as _get_note_store
from noterag.store.sqlite import SQLiteNoteStore
from noterag.trace.writer import TraceWriter


@lru_cache
def get_embedder_instance() -> Embedder:
    """Get cached embedder instance."""
    return get_embedder()


@lru_cache
def get_answerer_instance() -> Answerer:
    """Get cached answerer."""
    return get_answerer()


@lru_cache
def get_note_store() -> SQLiteNoteStore:
    """Get cached note store."""
    return _get_note_store()


def get_ranker() -> Ranker:
    """Get ranker configured with the context size."""
    settings = get_settings()
    return Ranker(top_k=settings.retrieval.top_k)


@lru_cache
def get_trace_writer() -> TraceWriter | None:
    """Get trace writer, or None when tracing is disabled."""
    settings = get_settings()
    if not settings.trace.enabled:
        return None
    return TraceWriter(output_dir=settings.trace.dir)


def get_note_service(
    embedder: Annotated[Embedder, Depends(get_embedder_instance)],
    store: Annotated[SQLiteNoteStore, Depends(get_note_store)],
    answerer: Annotated[Answerer, Depends(get_answerer_instance)],
    ranker: Annotated[Ranker, Depends(get_ranker)],
    trace_writer: Annotated[TraceWriter | None, Depends(get_trace_writer)],
) -> NoteService:
    """Get note service wired with the configured components."""
    return NoteService(
        embedder=embedder,
        store=store,
        answerer=answerer,
        ranker=ranker,
        trace_writer=trace_writer,
    )
