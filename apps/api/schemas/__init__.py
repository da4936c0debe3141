"""API request and response schemas."""

from apps.api.schemas.requests import NoteCreateRequest, QueryRequest
from apps.api.schemas.responses import (
    ErrorResponse,
    HealthResponse,
    NoteResponse,
    QueryResponse,
    SourceNote,
)

__all__ = [
    "NoteCreateRequest",
    "QueryRequest",
    "NoteResponse",
    "QueryResponse",
    "SourceNote",
    "ErrorResponse",
    "HealthResponse",
]
