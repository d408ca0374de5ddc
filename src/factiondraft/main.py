"""FastAPI application entry point."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncEngine

from factiondraft import __version__
from factiondraft.api.rate_limit import limiter
from factiondraft.api.router import api_router
from factiondraft.db.session import create_engine, create_session_factory, create_tables
from factiondraft.errors import DraftError
from factiondraft.rooms.manager import RoomManager
from factiondraft.rooms.store import (
    DatabaseRoomStore,
    FileRoomStore,
    InMemoryRoomStore,
    RoomStore,
)
from factiondraft.settings import Settings, get_settings


def setup_logging() -> None:
    """Configure logging for the application."""
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("factiondraft").setLevel(
        logging.DEBUG if get_settings().dev_mode else logging.INFO
    )
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)


# Set up logging on import
setup_logging()
logger = logging.getLogger(__name__)


def build_room_store(settings: Settings) -> tuple[RoomStore, AsyncEngine | None]:
    """Create the room store selected by settings.

    Returns:
        Tuple of (store, database engine or None for non-database stores)
    """
    if settings.room_store == "file":
        return FileRoomStore(settings.room_data_dir), None

    if settings.uses_database:
        engine = create_engine(settings.database_url)
        return DatabaseRoomStore(create_session_factory(engine)), engine

    return InMemoryRoomStore(), None


settings = get_settings()
room_store, db_engine = build_room_store(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info(
        f"Starting faction draft server (room_store={settings.room_store}, "
        f"dev_mode={settings.dev_mode})"
    )

    if db_engine is not None and settings.database_create_tables:
        await create_tables(db_engine)

    yield

    logger.info("Shutting down faction draft server")
    if db_engine is not None:
        await db_engine.dispose()


app = FastAPI(
    title="Faction Draft",
    description="Private lobby and hidden faction draft API",
    version=__version__,
    lifespan=lifespan,
)

# One manager per process, injected into routes via factiondraft.api.deps
app.state.room_manager = RoomManager(room_store)

# CORS middleware
# In dev mode, allow localhost. In production, allow the configured frontend URL.
cors_origins = (
    ["http://localhost:3000", "http://127.0.0.1:3000"]
    if settings.dev_mode
    else [settings.frontend_url]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(DraftError)
async def draft_error_handler(request: Request, exc: DraftError) -> JSONResponse:
    """Turn a rejected draft operation into a JSON error response."""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Faction Draft API", "version": __version__}


# Include API routers
app.include_router(api_router, prefix="/api")
