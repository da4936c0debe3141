"""API request schemas."""

from pydantic import BaseModel, Field


class NoteCreateRequest(BaseModel):
    """Request to create (ingest) a note."""

    title: str = Field(
        ...,
        max_length=500,
        description="Note title",
    )
    content: str = Field(
        ...,
        description="Note body",
    )


class QueryRequest(BaseModel):
    """Request to answer a question from the notes."""

    question: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="The question to answer",
    )
    return_trace: bool = Field(
        default=False,
        description="Whether to return the ranking trace",
    )
