"""Note management endpoints."""

from fastapi import APIRouter, Depends, status

from apps.api.dependencies import get_note_service
from apps.api.schemas.requests import NoteCreateRequest
from apps.api.schemas.responses import ErrorResponse, NoteResponse
from noterag.service import NoteService

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
    description="Embed a note and store it together with its embedding.",
    responses={
        503: {"model": ErrorResponse, "description": "Embedding service unavailable"},
    },
)
async def create_note(
    request: NoteCreateRequest,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Ingest a note."""
    note = await service.ingest(request.title, request.content)
    return NoteResponse(id=note.id, title=note.title, content=note.content)


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="Return all notes in creation order.",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> list[NoteResponse]:
    """List all notes."""
    notes = await service.list_notes()
    return [NoteResponse(id=n.id, title=n.title, content=n.content) for n in notes]


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete note",
    description="Delete a note. Unknown ids succeed without effect.",
)
async def delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> None:
    """Delete a note."""
    await service.delete_note(note_id)
