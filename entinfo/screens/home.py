"""Home feed: hero carousel plus trending, top rated and recommended rows."""

from __future__ import annotations

import asyncio

from pydantic import BaseModel, Field

from ..models import MediaItem, Movie, TrendingItem, TVShow
from ..utils import exclude_people, first
from .base import FeedScreen

HERO_COUNT = 8
ROW_COUNT = 12
TRENDING_ROW_OFFSET = 3
RECOMMENDED_MIN_VOTE = 7.0


class HomeFeed(BaseModel):
    hero: list[MediaItem] = Field(default_factory=list)
    trending_now: list[MediaItem] = Field(default_factory=list)
    top_movies: list[MediaItem] = Field(default_factory=list)
    top_tv: list[MediaItem] = Field(default_factory=list)
    highly_recommend: list[MediaItem] = Field(default_factory=list)


def highly_recommended(items: list[MediaItem], limit: int = ROW_COUNT) -> list[MediaItem]:
    """Best rated items first; ties keep their incoming order."""

    rated = [item for item in items if item.vote_average >= RECOMMENDED_MIN_VOTE]
    rated.sort(key=lambda item: item.vote_average, reverse=True)
    return rated[:limit]


def build_home_feed(
    trending: list[TrendingItem], movies: list[Movie], shows: list[TVShow]
) -> HomeFeed:
    trending_items = exclude_people(trending)
    movie_items = [MediaItem.from_movie(movie) for movie in movies]
    tv_items = [MediaItem.from_tv(show) for show in shows]
    return HomeFeed(
        hero=first(trending_items, HERO_COUNT),
        trending_now=first(trending_items, ROW_COUNT, offset=TRENDING_ROW_OFFSET),
        top_movies=first(movie_items, ROW_COUNT),
        top_tv=first(tv_items, ROW_COUNT),
        highly_recommend=highly_recommended(movie_items + tv_items),
    )


class HomeScreen(FeedScreen[HomeFeed]):
    name = "home"

    async def fetch(self) -> HomeFeed:
        trending, movies, shows = await asyncio.gather(
            self._client.fetch_trending(),
            self._client.fetch_top_rated_movies(),
            self._client.fetch_top_rated_tv(),
        )
        return build_home_feed(trending, movies, shows)
