"""FastAPI application for the notes backend."""

from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from apps.api.dependencies import get_note_store
from apps.api.routers import notes_router, query_router
from apps.api.schemas.responses import ErrorResponse, HealthResponse
from noterag import __version__
from noterag.config import get_settings
from noterag.errors import NoteRAGError, ProviderError, StorageError
from noterag.log import configure_logging
from noterag.store.sqlite import SQLiteNoteStore

configure_logging(
    level=get_settings().log_level,
    json_logs=get_settings().log_json,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting notes API", version=__version__)

    settings = get_settings()
    logger.info(
        "Configuration loaded",
        provider_url=settings.provider.base_url,
        embedding_model=settings.provider.embedding_model,
        completion_model=settings.provider.completion_model,
        top_k=settings.retrieval.top_k,
        db_path=settings.storage.db_path,
    )

    store = app.dependency_overrides.get(get_note_store, get_note_store)()
    await store.initialize()

    yield

    # Shutdown
    logger.info("Shutting down notes API")


app = FastAPI(
    title="Notes API",
    description="Personal notes with semantic retrieval and generated answers",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


def _status_for(exc: NoteRAGError) -> int:
    if isinstance(exc, ProviderError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# Exception handlers
@app.exception_handler(NoteRAGError)
async def pipeline_exception_handler(request: Request, exc: NoteRAGError) -> JSONResponse:
    """Flatten pipeline errors to a kind and a message."""
    logger.warning(
        "Request failed",
        path=request.url.path,
        method=request.method,
        kind=exc.kind,
        error=str(exc),
    )

    return JSONResponse(
        status_code=_status_for(exc),
        content=ErrorResponse(error=exc.kind, detail=str(exc)).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="internal_error",
            detail="An unexpected error occurred",
        ).model_dump(),
    )


# Include routers
app.include_router(notes_router)
app.include_router(query_router)


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check service health and note store access.",
    tags=["health"],
)
async def health_check(
    store: SQLiteNoteStore = Depends(get_note_store),
) -> HealthResponse:
    """Check service health."""
    note_count = None
    try:
        note_count = await store.count()
        store_status = "ok"
    except StorageError as e:
        store_status = f"error: {e}"

    return HealthResponse(
        status="healthy" if store_status == "ok" else "degraded",
        version=__version__,
        store_status=store_status,
        note_count=note_count,
    )


@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": "Notes API",
        "version": __version__,
        "docs": "/docs",
    }


def run() -> None:
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "apps.api.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
