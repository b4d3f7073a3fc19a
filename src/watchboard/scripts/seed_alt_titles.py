"""Seed script to load alternate titles into the document store.

Usage:
    python -m watchboard.scripts.seed_alt_titles alt_titles.json

The JSON file holds a list of ``{"media_id": int, "alt_titles": [str]}`` objects.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from watchboard.config import settings
from watchboard.database import create_client
from watchboard.schemas.alt_title import AltTitleRecord
from watchboard.services.alt_title_store import AltTitleStore

logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[AltTitleRecord]:
    """Read and validate alt-title records from a JSON file."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return [AltTitleRecord.model_validate(item) for item in raw]


async def seed_alt_titles(path: Path) -> int:
    """Upsert every record in *path*; returns the number of records written."""
    records = load_records(path)
    client = create_client()
    try:
        store = AltTitleStore(client[settings.mongodb_database][settings.alt_titles_collection])
        for record in records:
            await store.upsert_alt_titles(record)
            print(f"Stored alt titles for media {record.media_id}: {', '.join(record.alt_titles)}")
    finally:
        await client.close()

    return len(records)


def main() -> None:
    parser = argparse.ArgumentParser(description="Load alternate titles into MongoDB")
    parser.add_argument("path", type=Path, help="JSON file of {media_id, alt_titles} objects")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    count = asyncio.run(seed_alt_titles(args.path))
    print(f"Seeded {count} alt-title records")


if __name__ == "__main__":
    main()
