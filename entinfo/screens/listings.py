"""Movies, TV and trending tabs."""

from __future__ import annotations

import asyncio

from pydantic import BaseModel, Field, computed_field

from ..models import MediaItem
from ..utils import exclude_people, first
from .base import FeedScreen

LISTING_COUNT = 20
TRENDING_COUNT = 24
TRENDING_ROW_COUNT = 12


class Listing(BaseModel):
    popular: list[MediaItem] = Field(default_factory=list)
    top_rated: list[MediaItem] = Field(default_factory=list)


class TrendingFeed(BaseModel):
    items: list[MediaItem] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def trending_now(self) -> list[MediaItem]:
        return self.items[:TRENDING_ROW_COUNT]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def grid(self) -> list[MediaItem]:
        return list(self.items)


class MoviesScreen(FeedScreen[Listing]):
    name = "movies"

    async def fetch(self) -> Listing:
        popular, top_rated = await asyncio.gather(
            self._client.fetch_popular_movies(),
            self._client.fetch_top_rated_movies(),
        )
        return Listing(
            popular=first(map(MediaItem.from_movie, popular), LISTING_COUNT),
            top_rated=first(map(MediaItem.from_movie, top_rated), LISTING_COUNT),
        )


class TVScreen(FeedScreen[Listing]):
    name = "tv"

    async def fetch(self) -> Listing:
        popular, top_rated = await asyncio.gather(
            self._client.fetch_popular_tv(),
            self._client.fetch_top_rated_tv(),
        )
        return Listing(
            popular=first(map(MediaItem.from_tv, popular), LISTING_COUNT),
            top_rated=first(map(MediaItem.from_tv, top_rated), LISTING_COUNT),
        )


class TrendingScreen(FeedScreen[TrendingFeed]):
    name = "trending"

    async def fetch(self) -> TrendingFeed:
        trending = await self._client.fetch_trending()
        return TrendingFeed(items=first(exclude_people(trending), TRENDING_COUNT))
