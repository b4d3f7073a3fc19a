"""MongoDB client management for the alt-title store."""

from typing import Any

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.server_api import ServerApi

from watchboard.config import settings


def create_client(uri: str | None = None) -> AsyncMongoClient[dict[str, Any]]:
    """
    Create the long-lived Mongo client.

    The client connects lazily, so this does no I/O; the application lifespan
    owns it and closes it on shutdown.
    """
    return AsyncMongoClient(uri or settings.mongodb_uri, server_api=ServerApi("1"))


async def get_db(request: Request) -> AsyncDatabase[dict[str, Any]]:
    """
    Dependency for FastAPI to provide the application database.

    Usage:
        @app.get("/endpoint")
        async def endpoint(db: AsyncDatabase = Depends(get_db)):
            # Use db here
    """
    client: AsyncMongoClient[dict[str, Any]] = request.app.state.mongo_client
    return client[settings.mongodb_database]
