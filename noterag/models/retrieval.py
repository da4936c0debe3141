"""Ranking-time models."""

from pydantic import BaseModel, Field

from noterag.models.note import Note


class ScoredEntry(BaseModel):
    """A note scored against a query.

    Built per ranking pass and discarded after context assembly.
    """

    note: Note
    embedding: list[float] = Field(repr=False)
    score: float
    rank: int = Field(..., ge=1, description="1-based position after sorting")


class RankedContext(BaseModel):
    """Output of a ranking pass."""

    entries: list[ScoredEntry] = Field(default_factory=list)
    context: str = ""
    total_candidates: int = 0
    skipped: int = Field(
        default=0,
        description="Entries excluded because they could not be scored",
    )

    @property
    def is_empty(self) -> bool:
        return not self.entries
