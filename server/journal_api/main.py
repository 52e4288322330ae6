"""Mood Journal API - FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from journal_core.errors import StorageError, ValidationError

from .config import get_settings
from .dependencies import get_store
from .routes import entries, statistics, suggestions, maintenance

log = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Reconcile duplicate days once at startup."""
    store = app.dependency_overrides.get(get_store, get_store)()
    try:
        removed = store.reconcile_duplicates()
        log.info(f"[API] Startup reconciliation removed {removed} entries")
    except StorageError as e:
        log.error(f"[API] Startup reconciliation failed: {e}")
    yield


app = FastAPI(
    title="Mood Journal API",
    description="Daily mood journal with statistics and activity suggestions",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(entries.router)
app.include_router(statistics.router)
app.include_router(suggestions.router)
app.include_router(maintenance.router)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    log.error(f"[API] Storage error on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "mood-journal-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.journal_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
