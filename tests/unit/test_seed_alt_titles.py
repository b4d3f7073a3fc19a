"""Unit tests for the alt-title seed script."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from watchboard.scripts.seed_alt_titles import load_records, seed_alt_titles


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    path = tmp_path / "alt_titles.json"
    path.write_text(
        json.dumps(
            [
                {"media_id": 918, "alt_titles": ["Gin Tama"]},
                {"media_id": 154587, "alt_titles": ["Frieren", "葬送のフリーレン"]},
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_load_records_validates_entries(records_file: Path) -> None:
    records = load_records(records_file)
    assert [r.media_id for r in records] == [918, 154587]
    assert records[1].alt_titles == ["Frieren", "葬送のフリーレン"]


def test_load_records_rejects_bad_ids(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"media_id": "abc", "alt_titles": []}]))
    with pytest.raises(ValidationError):
        load_records(path)


async def test_seed_upserts_every_record_and_closes_client(records_file: Path) -> None:
    collection = MagicMock()
    collection.create_index = AsyncMock()
    collection.update_one = AsyncMock()
    client = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = collection
    client.close = AsyncMock()

    with patch("watchboard.scripts.seed_alt_titles.create_client", return_value=client):
        count = await seed_alt_titles(records_file)

    assert count == 2
    assert collection.update_one.await_count == 2
    client.close.assert_awaited_once()
