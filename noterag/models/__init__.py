"""Data models."""

from noterag.models.generation import Answer, AnswerTrace, ScoreRecord, TracedAnswer
from noterag.models.note import Note, StoredNote
from noterag.models.retrieval import RankedContext, ScoredEntry

__all__ = [
    "Note",
    "StoredNote",
    "ScoredEntry",
    "RankedContext",
    "Answer",
    "AnswerTrace",
    "ScoreRecord",
    "TracedAnswer",
]
