"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from watchboard.api.error_handlers import register_error_handlers
from watchboard.api.routes import anime, health, internal, manga
from watchboard.config import settings
from watchboard.database import create_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the Mongo client is shared by every request for the app's lifetime
    app.state.mongo_client = create_client()
    logger.info(f"Mongo client created for database '{settings.mongodb_database}'")

    yield

    # Shutdown: release pooled connections
    await app.state.mongo_client.close()
    logger.info("Mongo client closed")


# Create FastAPI app
app = FastAPI(
    title="Watchboard API",
    description="Watch-list dashboard merging tracker lists, release feeds and alt titles",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
    ],  # Frontend development server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(anime.router, prefix="/api/v1", tags=["anime"])
app.include_router(manga.router, prefix="/api/v1", tags=["manga"])
app.include_router(internal.router, prefix="/api/v1", tags=["internal"])
