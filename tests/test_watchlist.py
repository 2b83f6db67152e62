"""Tests for the watchlist store and its database-backed slot."""

from __future__ import annotations

import json

import pytest

from entinfo.database import Database
from entinfo.services.watchlist import DatabaseSlot, WatchlistStore


class MemorySlot:
    def __init__(self, value: str = "[]") -> None:
        self.value = value
        self.writes: list[str] = []

    async def read(self) -> str:
        return self.value

    async def write(self, value: str) -> None:
        self.value = value
        self.writes.append(value)


@pytest.mark.anyio
async def test_toggle_adds_then_removes() -> None:
    slot = MemorySlot()
    store = WatchlistStore(slot)

    assert await store.toggle("movie", 42) is True
    assert await store.contains("movie-42")
    assert await store.toggle("movie", 42) is False
    assert not await store.contains("movie-42")
    assert slot.writes == ['["movie-42"]', "[]"]


@pytest.mark.anyio
async def test_persisted_array_is_sorted_after_each_write() -> None:
    slot = MemorySlot()
    store = WatchlistStore(slot)

    for media_type, media_id in (("tv", 7), ("movie", 42), ("movie", 100)):
        await store.toggle(media_type, media_id)
        persisted = json.loads(slot.value)
        assert persisted == sorted(persisted)

    assert json.loads(slot.value) == ["movie-100", "movie-42", "tv-7"]


@pytest.mark.anyio
@pytest.mark.parametrize("raw", ["not json", '{"movie-1": true}', "[1, 2]", ""])
async def test_unreadable_payload_counts_as_empty(raw: str) -> None:
    slot = MemorySlot(raw)
    store = WatchlistStore(slot)

    assert await store.keys() == set()
    assert await store.toggle("tv", 3) is True
    assert slot.value == '["tv-3"]'


@pytest.mark.anyio
async def test_database_slot_round_trips(tmp_path) -> None:
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'watchlist.db'}")
    await database.create_all()
    try:
        slot = DatabaseSlot(database)
        assert await slot.read() == "[]"

        store = WatchlistStore(slot)
        await store.toggle("movie", 42)
        await store.toggle("tv", 1)

        reopened = WatchlistStore(DatabaseSlot(database))
        assert await reopened.keys() == {"movie-42", "tv-1"}
        assert await slot.read() == '["movie-42","tv-1"]'
    finally:
        await database.dispose()
