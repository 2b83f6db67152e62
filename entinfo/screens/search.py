"""Multi-search across movies and TV."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..models import MediaItem
from ..utils import exclude_people
from .base import Screen, ScreenState


class SearchResults(BaseModel):
    query: str = ""
    results: list[MediaItem] = Field(default_factory=list)


class SearchScreen(Screen[SearchResults]):
    """Search screen; every query supersedes the one before it."""

    name = "search"

    async def search(self, query: str) -> ScreenState[SearchResults]:
        """Run ``query`` and return its own outcome.

        The outcome is published only while no newer query has started, so a
        caller whose query was overtaken still gets its own results back.
        """

        trimmed = query.strip()
        if not trimmed:
            self._supersede()
            cleared: ScreenState[SearchResults] = ScreenState(
                status="idle", data=SearchResults()
            )
            self._publish(cleared)
            return cleared

        async def _fetch() -> SearchResults:
            entries = await self._client.search_multi(trimmed)
            return SearchResults(query=trimmed, results=exclude_people(entries))

        return await self._commit(_fetch)
