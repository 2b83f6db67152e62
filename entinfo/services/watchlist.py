"""Process-wide watchlist persisted as a sorted JSON array of media keys."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from ..database import Database
from ..db_models import StorageSlot
from ..models import MediaType

logger = logging.getLogger(__name__)

WATCHLIST_SLOT = "watchlist"
EMPTY_WATCHLIST = "[]"

_KEYS_ADAPTER = TypeAdapter(list[str])


class StringSlot(Protocol):
    """A single persisted string value."""

    async def read(self) -> str: ...

    async def write(self, value: str) -> None: ...


class DatabaseSlot:
    """String slot stored as one row of the ``storage_slots`` table."""

    def __init__(
        self,
        database: Database,
        name: str = WATCHLIST_SLOT,
        default: str = EMPTY_WATCHLIST,
    ) -> None:
        self._database = database
        self._name = name
        self._default = default

    async def read(self) -> str:
        async with self._database.session() as session:
            record = await session.get(StorageSlot, self._name)
            if record is None:
                return self._default
            return record.value

    async def write(self, value: str) -> None:
        async with self._database.session() as session:
            record = await session.get(StorageSlot, self._name)
            if record is None:
                session.add(StorageSlot(name=self._name, value=value))
            else:
                record.value = value
            await session.commit()


class WatchlistStore:
    """Set of ``{media_type}-{id}`` keys backed by a :class:`StringSlot`.

    The slot is re-read on every access, so the store never caches a stale
    copy; unreadable payloads count as an empty watchlist.
    """

    def __init__(self, slot: StringSlot) -> None:
        self._slot = slot
        self._lock = asyncio.Lock()

    @staticmethod
    def key(media_type: MediaType, media_id: int) -> str:
        return f"{media_type}-{media_id}"

    async def keys(self) -> set[str]:
        raw = await self._slot.read()
        try:
            return set(_KEYS_ADAPTER.validate_json(raw or EMPTY_WATCHLIST))
        except ValidationError:
            logger.warning("Ignoring unreadable watchlist payload: %r", raw[:200])
            return set()

    async def contains(self, key: str) -> bool:
        return key in await self.keys()

    async def toggle(self, media_type: MediaType, media_id: int) -> bool:
        """Flip membership of the item and return the new membership."""

        key = self.key(media_type, media_id)
        async with self._lock:
            keys = await self.keys()
            if key in keys:
                keys.discard(key)
                member = False
            else:
                keys.add(key)
                member = True
            await self._slot.write(_KEYS_ADAPTER.dump_json(sorted(keys)).decode())
        logger.info("Watchlist %s %s", "added" if member else "removed", key)
        return member
