"""API response schemas."""

from pydantic import BaseModel, Field

from noterag.models.generation import AnswerTrace


class NoteResponse(BaseModel):
    """A stored note."""

    id: int = Field(..., description="Note ID")
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body")


class SourceNote(BaseModel):
    """A note used as context for an answer."""

    note_id: int = Field(..., description="Note ID")
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body, truncated")
    score: float = Field(..., description="Cosine similarity to the question")
    rank: int = Field(..., description="Position in the context")


class QueryResponse(BaseModel):
    """Response to a question."""

    question: str = Field(..., description="Original question")
    answer: str = Field(..., description="Generated answer")
    model: str = Field(..., description="Completion model used")
    sources: list[SourceNote] = Field(
        default_factory=list, description="Notes placed in the context"
    )
    latency_ms: float = Field(..., description="Total processing time in ms")
    trace: AnswerTrace | None = Field(
        default=None, description="Ranking trace (if requested)"
    )


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error type")
    detail: str | None = Field(default=None, description="Error details")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    store_status: str = Field(..., description="Note store status")
    note_count: int | None = Field(default=None, description="Stored notes")
