"""EventMaster event-planning service."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.database import create_db_and_tables, new_session
from app.core.scheduler import scheduler, shutdown_scheduler, start_scheduler
from app.routes import auth, events, files, notes, public, resources, rsvp, tasks
from app.services.notes import NoteAutosaver
from app.services.uploads import UploadManager

# Configure logging
log_dir = Path(settings.log_dir).expanduser()
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)

upload_dir = Path(settings.upload_dir).expanduser()
upload_dir.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting EventMaster")
    create_db_and_tables()
    app.state.note_autosaver = NoteAutosaver(
        scheduler,
        new_session,
        delay_seconds=settings.note_autosave_seconds,
        history_limit=settings.note_history_limit,
    )
    app.state.upload_manager = UploadManager(
        scheduler,
        new_session,
        upload_dir,
        tick_seconds=settings.upload_tick_seconds,
        step=settings.upload_step,
        retention_seconds=settings.upload_retention_seconds,
    )
    start_scheduler()
    yield
    # Shutdown
    shutdown_scheduler()
    logger.info("EventMaster shut down")


app = FastAPI(
    title=settings.app_name,
    description="Plan events, collect RSVPs and track tasks, notes, files and resources",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Serve uploaded file blobs
app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

# Include routers
app.include_router(auth.router)
app.include_router(events.router)
app.include_router(tasks.router)
app.include_router(notes.router)
app.include_router(resources.router)
app.include_router(files.router)
app.include_router(rsvp.router)
app.include_router(public.router)


@app.get("/")
async def root(request: Request):
    """Redirect root to the event list."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/events")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
