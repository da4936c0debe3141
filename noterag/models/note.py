"""Note models."""

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    """A persisted note, without its embedding."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Store-assigned identifier")
    title: str
    content: str


class StoredNote(BaseModel):
    """A note together with its decoded embedding."""

    model_config = ConfigDict(frozen=True)

    note: Note
    embedding: list[float]


def note_text(title: str, content: str) -> str:
    """Build the text embedded for a note."""
    return f"{title}: {content}"
