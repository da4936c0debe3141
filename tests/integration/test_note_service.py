"""Integration tests for the note service over a real SQLite store."""

import json
from datetime import datetime, timezone

import pytest

from conftest import FakeCompleter, FakeEmbedder
from noterag.errors import GenerationError, ProviderError
from noterag.generate.answerer import Answerer
from noterag.generate.prompts import ANSWER_INSTRUCTIONS, build_answer_prompt
from noterag.models.generation import AnswerTrace
from noterag.models.note import Note
from noterag.retrieve.ranker import Ranker
from noterag.service import NoteService
from noterag.trace.writer import TraceWriter


class TestIngest:
    """Test the write path."""

    @pytest.mark.asyncio
    async def test_ingest_embeds_title_and_content(self, make_service, note_store):
        """Test that the note text is embedded and stored with the note."""
        embedder = FakeEmbedder(vectors={"Trip: Paris in June": [1.0, 0.0, 0.0]})
        service = make_service(embedder)

        note = await service.ingest("Trip", "Paris in June")

        assert embedder.calls == ["Trip: Paris in June"]
        assert note == Note(id=note.id, title="Trip", content="Paris in June")

        entries = await note_store.all_with_embeddings()
        assert entries[0].note == note
        assert entries[0].embedding == [1.0, 0.0, 0.0]

    @pytest.mark.asyncio
    async def test_failed_embedding_writes_nothing(
        self, make_service, failing_embedder, note_store
    ):
        """Test that ingestion aborts without a partial record."""
        service = make_service(failing_embedder)

        with pytest.raises(ProviderError):
            await service.ingest("Trip", "Paris in June")

        assert await note_store.count() == 0

    @pytest.mark.asyncio
    async def test_list_and_delete(self, make_service, fake_embedder):
        """Test listing and deleting through the service."""
        service = make_service(fake_embedder)
        first = await service.ingest("A", "alpha")
        second = await service.ingest("B", "beta")

        assert await service.list_notes() == [first, second]

        await service.delete_note(first.id)

        assert await service.list_notes() == [second]


class TestAnswer:
    """Test the answer path end to end."""

    @pytest.mark.asyncio
    async def test_single_matching_note_ranks_first(self, make_service, fake_completer):
        """Ingest one note and query with the same embedding."""
        embedder = FakeEmbedder(
            vectors={
                "Trip: Paris in June": [1.0, 0.0, 0.0],
                "Where is the trip?": [1.0, 0.0, 0.0],
            }
        )
        service = make_service(embedder)
        note = await service.ingest("Trip", "Paris in June")

        result = await service.answer("Where is the trip?")

        assert result.context_notes[0].note == note
        assert result.context_notes[0].score == pytest.approx(1.0)
        assert result.context_notes[0].rank == 1
        assert result.answer == fake_completer.answer
        assert result.model == "fake-llm"

    @pytest.mark.asyncio
    async def test_closer_note_ranks_higher(self, make_service):
        """Ingest [1,0] and [0,1]; query [0.9,0.1] prefers the first."""
        embedder = FakeEmbedder(
            vectors={
                "East: first": [1.0, 0.0],
                "North: second": [0.0, 1.0],
                "which?": [0.9, 0.1],
            }
        )
        service = make_service(embedder)
        east = await service.ingest("East", "first")
        north = await service.ingest("North", "second")

        result = await service.answer("which?")

        assert [e.note.id for e in result.context_notes] == [east.id, north.id]
        assert result.context_notes[0].score > result.context_notes[1].score

    @pytest.mark.asyncio
    async def test_delete_missing_note_succeeds(self, make_service, fake_embedder):
        """Deleting a non-existent id is not an error."""
        service = make_service(fake_embedder)

        await service.delete_note(424242)

        assert await service.list_notes() == []

    @pytest.mark.asyncio
    async def test_no_notes_still_asks(self, make_service, fake_embedder, fake_completer):
        """Answering with nothing stored sends an empty context."""
        service = make_service(fake_embedder)

        result = await service.answer("Anything?")

        assert result.context_notes == []
        assert fake_completer.prompts == [
            build_answer_prompt(context="", question="Anything?")
        ]
        assert result.answer == fake_completer.answer

    @pytest.mark.asyncio
    async def test_prompt_contains_ranked_context(self, make_service, fake_completer):
        """Test that the prompt carries instructions, ranked notes and question."""
        embedder = FakeEmbedder(
            vectors={
                "Low: far": [0.0, 1.0],
                "High: near": [1.0, 0.0],
                "q": [1.0, 0.0],
            }
        )
        service = make_service(embedder)
        await service.ingest("Low", "far")
        await service.ingest("High", "near")

        await service.answer("q")

        prompt = fake_completer.prompts[0]
        assert prompt.startswith(ANSWER_INSTRUCTIONS)
        assert prompt.index("Title: High") < prompt.index("Title: Low")
        assert prompt.endswith("Question:\nq")

    @pytest.mark.asyncio
    async def test_top_k_limits_context(self, make_service, fake_completer):
        """Test that only top_k notes reach the prompt."""
        service = make_service(FakeEmbedder(default=[1.0, 0.0]), top_k=2)
        for i in range(5):
            await service.ingest(f"Note{i}", "body")

        result = await service.answer("q")

        assert len(result.context_notes) == 2
        # All scores tie, so insertion order wins
        assert [e.note.title for e in result.context_notes] == ["Note0", "Note1"]
        assert "Note2" not in fake_completer.prompts[0]

    @pytest.mark.asyncio
    async def test_question_embedding_failure(self, make_service, fake_completer):
        """Test that a failing embedder stops before asking."""
        service = make_service(FakeEmbedder(error=ProviderError("down")))

        with pytest.raises(ProviderError):
            await service.answer("q")

        assert fake_completer.prompts == []

    @pytest.mark.asyncio
    async def test_generation_failure(self, make_service, fake_embedder, failing_completer):
        """Test that completion failures surface as GenerationError."""
        service = make_service(fake_embedder, completer=failing_completer)
        await service.ingest("A", "alpha")

        with pytest.raises(GenerationError):
            await service.answer("q")

    @pytest.mark.asyncio
    async def test_stale_dimension_notes_are_excluded(self, note_store, fake_completer):
        """Test that notes from another embedding model do not break answers."""
        await note_store.save("Old", "old model", [1.0, 0.0])
        embedder = FakeEmbedder(default=[1.0, 0.0, 0.0])
        service = NoteService(
            embedder=embedder,
            store=note_store,
            answerer=Answerer(fake_completer),
            ranker=Ranker(top_k=10),
        )
        new = await service.ingest("New", "new model")

        result = await service.answer("q")

        assert [e.note.id for e in result.context_notes] == [new.id]
        assert result.trace.skipped == 1
        assert result.trace.total_candidates == 2

    @pytest.mark.asyncio
    async def test_answer_text(self, make_service, fake_embedder, fake_completer):
        """Test the text-only convenience wrapper."""
        service = make_service(fake_embedder)
        assert await service.answer_text("q") == fake_completer.answer


class TestAnswerTrace:
    """Test answer traces."""

    @pytest.mark.asyncio
    async def test_trace_records_scores(self, make_service):
        """Test that the trace lists the ranked notes."""
        embedder = FakeEmbedder(vectors={"A: a": [1.0, 0.0], "B: b": [0.0, 1.0]})
        service = make_service(embedder)
        a = await service.ingest("A", "a")
        b = await service.ingest("B", "b")

        result = await service.answer("q")

        assert [s.note_id for s in result.trace.scores] == [a.id, b.id]
        assert result.trace.scores[0].score == pytest.approx(1.0)
        assert result.trace.answer == result.answer
        assert result.trace.prompt_chars > 0

    @pytest.mark.asyncio
    async def test_prompt_composed_once(self, make_service, fake_embedder, monkeypatch):
        """Test that the traced prompt length matches the single prompt sent."""
        completer = FakeCompleter()
        service = make_service(fake_embedder, completer)
        await service.ingest("A", "a")

        compose_calls = []
        original = service.answerer.compose

        def counting_compose(context, question):
            compose_calls.append(question)
            return original(context, question)

        monkeypatch.setattr(service.answerer, "compose", counting_compose)

        result = await service.answer("q")

        assert compose_calls == ["q"]
        assert len(completer.prompts) == 1
        assert result.trace.prompt_chars == len(completer.prompts[0])

    @pytest.mark.asyncio
    async def test_trace_writer_persists(self, note_store, fake_embedder, tmp_path):
        """Test that traces are appended to JSONL when a writer is set."""
        writer = TraceWriter(output_dir=tmp_path / "traces")
        service = NoteService(
            embedder=fake_embedder,
            store=note_store,
            answerer=Answerer(FakeCompleter()),
            trace_writer=writer,
        )

        result = await service.answer("first?")
        await service.answer("second?")

        files = list((tmp_path / "traces").glob("traces_*.jsonl"))
        assert len(files) == 1
        lines = files[0].read_text().splitlines()
        assert json.loads(lines[0])["trace_id"] == result.trace.trace_id

        loaded = writer.load_traces()
        assert [t.question for t in loaded] == ["first?", "second?"]
        assert writer.load_traces(limit=1)[0].question == "first?"

    def test_load_traces_filters_by_date(self, tmp_path):
        """Test date filtering with naive and aware bounds."""
        writer = TraceWriter(output_dir=tmp_path / "traces")
        for day in (1, 2, 3):
            writer.write(
                AnswerTrace(
                    trace_id=f"t{day}",
                    question=f"day {day}?",
                    timestamp=datetime(2024, 1, day, 12, tzinfo=timezone.utc),
                )
            )

        assert [t.trace_id for t in writer.load_traces(start_date=datetime(2024, 1, 2))] == [
            "t2",
            "t3",
        ]
        assert [t.trace_id for t in writer.load_traces(end_date=datetime(2024, 1, 2, 23))] == [
            "t1",
            "t2",
        ]
        assert [
            t.trace_id
            for t in writer.load_traces(
                start_date=datetime(2024, 1, 2, tzinfo=timezone.utc),
                end_date=datetime(2024, 1, 2, 23, tzinfo=timezone.utc),
            )
        ] == ["t2"]
        assert writer.load_traces(start_date=datetime(2000, 1, 1), limit=1)[0].trace_id == "t1"
