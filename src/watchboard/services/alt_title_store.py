"""Alt-title store backed by a MongoDB collection."""

import logging
from typing import Any

from pydantic import ValidationError
from pymongo import ASCENDING
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from watchboard.errors import StoreError
from watchboard.schemas.alt_title import AltTitleRecord

logger = logging.getLogger(__name__)


class AltTitleStore:
    """
    Reads cached alternate titles keyed by tracker media id.

    The collection handle is owned by the application and shared across
    requests; the store only ever creates the media_id index and reads, apart
    from the explicit upsert used for seeding.
    """

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self.collection = collection

    async def ensure_index(self) -> None:
        """Create the unique media_id index (no-op when it already exists)."""
        try:
            await self.collection.create_index([("media_id", ASCENDING)], unique=True)
        except PyMongoError as e:
            logger.error(f"Could not ensure media_id index on alt titles: {e}")
            raise StoreError(f"Could not ensure alt title index: {e}") from e

    async def fetch_alt_titles(self) -> dict[int, AltTitleRecord]:
        """
        Read every alt-title document.

        Returns:
            Mapping of media id to its alt-title record

        Raises:
            StoreError: Index creation, the read, or decoding a document failed
        """
        await self.ensure_index()

        try:
            documents = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Could not read alt titles: {e}")
            raise StoreError(f"Could not read alt titles: {e}") from e

        try:
            records = [AltTitleRecord.model_validate(document) for document in documents]
        except ValidationError as e:
            logger.error(f"Could not decode alt title document: {e}")
            raise StoreError(f"Could not decode alt titles: {e}") from e

        logger.info(f"Alt titles: {len(records)} records")
        return {record.media_id: record for record in records}

    async def upsert_alt_titles(self, record: AltTitleRecord) -> None:
        """Insert or replace the alt titles for one media id."""
        await self.ensure_index()

        try:
            await self.collection.update_one(
                {"media_id": record.media_id},
                {"$set": {"alt_titles": record.alt_titles}},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error(f"Could not store alt titles for {record.media_id}: {e}")
            raise StoreError(f"Could not store alt titles: {e}") from e
