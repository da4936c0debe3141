"""Note service: the public operations of the notes backend.

Ingestion embeds a note and stores it with its embedding. Answering embeds
the question, ranks every stored note against it, and asks the completion
service with the top notes as context. The steps of one answer run strictly
in sequence; separate operations share nothing but the store.
"""

import time
from uuid import uuid4

import structlog

from noterag.errors import ProviderError
from noterag.generate.answerer import Answerer
from noterag.models.generation import AnswerTrace, ScoreRecord, TracedAnswer
from noterag.models.note import Note, note_text
from noterag.protocols import Embedder, NoteStore
from noterag.retrieve.ranker import Ranker
from noterag.trace.writer import TraceWriter

logger = structlog.get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class NoteService:
    """Orchestrates embedding, storage, ranking and answering."""

    def __init__(
        self,
        embedder: Embedder,
        store: NoteStore,
        answerer: Answerer,
        ranker: Ranker | None = None,
        trace_writer: TraceWriter | None = None,
    ):
        """Initialize note service.

        Args:
            embedder: Embedding provider used for notes and questions
            store: Note persistence
            answerer: Prompt composition and completion
            ranker: Similarity ranker (top 10 if None)
            trace_writer: Optional writer persisting a trace per answer
        """
        self.embedder = embedder
        self.store = store
        self.answerer = answerer
        self.ranker = ranker or Ranker()
        self.trace_writer = trace_writer

    async def ingest(self, title: str, content: str) -> Note:
        """Embed a note and persist it together with its embedding.

        Nothing is written if embedding fails.

        Raises:
            ProviderError: If the embedding service fails
            StorageError: If the write fails
        """
        log = logger.bind(operation="ingest", title=title)

        try:
            embedding = await self.embedder.embed(note_text(title, content))
        except ProviderError as e:
            log.warning("ingest_aborted", error=str(e), kind=e.kind)
            raise

        note_id = await self.store.save(title, content, embedding)
        log.info("note_ingested", note_id=note_id, dimension=len(embedding))

        return Note(id=note_id, title=title, content=content)

    async def list_notes(self) -> list[Note]:
        """Return all notes in store order."""
        return await self.store.list()

    async def delete_note(self, note_id: int) -> None:
        """Delete a note; missing ids are not an error."""
        await self.store.delete(note_id)
        logger.info("note_deleted", operation="delete", note_id=note_id)

    async def answer(self, question: str) -> TracedAnswer:
        """Answer a question from the stored notes.

        Runs embed, fetch, rank, compose and ask in order. With no stored
        notes the completion request is still made with an empty context.

        Raises:
            ProviderError: If embedding the question fails
            StorageError: If notes cannot be read
            GenerationError: If the completion service fails
        """
        start_time = time.perf_counter()
        trace = AnswerTrace(trace_id=str(uuid4()), question=question)
        log = logger.bind(operation="answer", trace_id=trace.trace_id)

        step_start = time.perf_counter()
        query_embedding = await self.embedder.embed(question)
        trace.embed_latency_ms = _elapsed_ms(step_start)

        step_start = time.perf_counter()
        entries = await self.store.all_with_embeddings()
        trace.fetch_latency_ms = _elapsed_ms(step_start)

        step_start = time.perf_counter()
        ranked = self.ranker.rank(query_embedding, entries)
        trace.rank_latency_ms = _elapsed_ms(step_start)
        trace.total_candidates = ranked.total_candidates
        trace.skipped = ranked.skipped
        trace.scores = [
            ScoreRecord(
                note_id=entry.note.id,
                title=entry.note.title,
                score=entry.score,
                rank=entry.rank,
            )
            for entry in ranked.entries
        ]

        log.info(
            "context_ranked",
            candidates=ranked.total_candidates,
            selected=len(ranked.entries),
            skipped=ranked.skipped,
            top_score=round(ranked.entries[0].score, 4) if ranked.entries else None,
        )

        prompt = self.answerer.compose(ranked.context, question)
        trace.prompt_chars = len(prompt)

        step_start = time.perf_counter()
        try:
            text = await self.answerer.ask(prompt)
        except ProviderError as e:
            log.warning("answer_failed", error=str(e), kind=e.kind)
            raise
        trace.generation_latency_ms = _elapsed_ms(step_start)

        trace.answer = text
        trace.total_latency_ms = _elapsed_ms(start_time)
        await self._write_trace(trace)

        log.info("question_answered", latency_ms=round(trace.total_latency_ms, 1))

        return TracedAnswer(
            question=question,
            answer=text,
            model=self.answerer.model_name,
            context_notes=ranked.entries,
            latency_ms=trace.total_latency_ms,
            trace=trace,
        )

    async def answer_text(self, question: str) -> str:
        """Answer a question and return only the generated text."""
        result = await self.answer(question)
        return result.answer

    async def _write_trace(self, trace: AnswerTrace) -> None:
        """Persist the trace if a writer is set; write errors are logged."""
        if self.trace_writer is None:
            return
        try:
            await self.trace_writer.awrite(trace)
        except OSError:
            logger.exception("trace_write_failed", trace_id=trace.trace_id)
