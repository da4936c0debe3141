"""Answer and trace models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from noterag.models.retrieval import ScoredEntry


class Answer(BaseModel):
    """Generated answer with the notes used as context."""

    question: str
    answer: str
    model: str
    context_notes: list[ScoredEntry] = Field(default_factory=list)
    latency_ms: float = 0.0


class ScoreRecord(BaseModel):
    """Score of one note in a traced ranking pass."""

    note_id: int
    title: str
    score: float
    rank: int


class AnswerTrace(BaseModel):
    """Record of one answer operation, for debugging ranking quality."""

    trace_id: str
    question: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    scores: list[ScoreRecord] = Field(default_factory=list)
    total_candidates: int = 0
    skipped: int = 0
    prompt_chars: int = 0
    embed_latency_ms: float = 0.0
    fetch_latency_ms: float = 0.0
    rank_latency_ms: float = 0.0
    generation_latency_ms: float = 0.0
    total_latency_ms: float = 0.0
    answer: str | None = None


class TracedAnswer(Answer):
    """Answer with its trace attached."""

    trace: AnswerTrace
