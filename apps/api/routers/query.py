"""Query endpoint for answering questions from notes."""

from fastapi import APIRouter, Depends

from apps.api.dependencies import get_note_service
from apps.api.schemas.requests import QueryRequest
from apps.api.schemas.responses import ErrorResponse, QueryResponse, SourceNote
from noterag.service import NoteService

router = APIRouter(prefix="/query", tags=["query"])

SOURCE_PREVIEW_CHARS = 500


@router.post(
    "",
    response_model=QueryResponse,
    summary="Ask the notes",
    description="Rank notes against the question and generate an answer.",
    responses={
        503: {"model": ErrorResponse, "description": "Provider unavailable"},
    },
)
async def query(
    request: QueryRequest,
    service: NoteService = Depends(get_note_service),
) -> QueryResponse:
    """Answer a question using the most similar notes as context."""
    result = await service.answer(request.question)

    sources = [
        SourceNote(
            note_id=entry.note.id,
            title=entry.note.title,
            content=_preview(entry.note.content),
            score=entry.score,
            rank=entry.rank,
        )
        for entry in result.context_notes
    ]

    return QueryResponse(
        question=result.question,
        answer=result.answer,
        model=result.model,
        sources=sources,
        latency_ms=result.latency_ms,
        trace=result.trace if request.return_trace else None,
    )


def _preview(content: str) -> str:
    if len(content) > SOURCE_PREVIEW_CHARS:
        return content[:SOURCE_PREVIEW_CHARS] + "..."
    return content
