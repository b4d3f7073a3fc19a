"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from watchboard.api.error_handlers import register_error_handlers
from watchboard.api.routes import anime, health, internal, manga


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the Mongo lifespan, for API tests."""
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(anime.router, prefix="/api/v1")
    app.include_router(manga.router, prefix="/api/v1")
    app.include_router(internal.router, prefix="/api/v1")
    return app
