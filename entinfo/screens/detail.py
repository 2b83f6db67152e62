"""Detail page for a single movie, show or person."""

from __future__ import annotations

import asyncio

from pydantic import BaseModel, Field, computed_field

from ..models import (
    CastMember,
    Creator,
    Credits,
    CrewMember,
    MediaItem,
    MovieDetail,
    QuickProvider,
    Review,
    TVDetail,
    WatchProviderRegion,
)
from ..services.providers import match_quick_providers
from ..services.tmdb import TMDBClient
from ..services.watchlist import WatchlistStore
from ..utils import first, parse_release_year
from .base import FeedScreen, ScreenState

CAST_COUNT = 12
CREW_COUNT = 4
REVIEW_COUNT = 3


class DetailBundle(BaseModel):
    title: str
    tagline: str | None = None
    overview: str = ""
    release_year: str | None = None
    genres: list[str] = Field(default_factory=list)
    cast: list[CastMember] = Field(default_factory=list)
    directors: list[CrewMember] = Field(default_factory=list)
    creators: list[Creator] = Field(default_factory=list)
    executive_producers: list[CrewMember] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    providers: WatchProviderRegion | None = None
    quick_providers: list[QuickProvider] = Field(default_factory=list)
    in_watchlist: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def featured_producers(self) -> list[CrewMember]:
        """Executive producers, shown only for titles without credited creators."""

        if self.creators:
            return []
        return self.executive_producers


def crew_with_job(crew: list[CrewMember], job: str) -> list[CrewMember]:
    return first((member for member in crew if member.job == job), CREW_COUNT)


def build_detail_bundle(
    media: MediaItem,
    detail: MovieDetail | TVDetail | None,
    credits: Credits | None,
    reviews: list[Review],
    providers: WatchProviderRegion | None,
    in_watchlist: bool,
) -> DetailBundle:
    if providers is not None and providers.is_empty():
        providers = None
    bundle: dict[str, object] = {
        "title": media.title_text,
        "overview": media.overview,
        "reviews": first(reviews, REVIEW_COUNT),
        "providers": providers,
        "in_watchlist": in_watchlist,
    }
    if isinstance(detail, MovieDetail):
        bundle.update(
            title=detail.title or media.title_text,
            release_year=parse_release_year(detail.release_date),
        )
    elif isinstance(detail, TVDetail):
        bundle.update(
            title=detail.name or media.title_text,
            release_year=parse_release_year(detail.first_air_date),
            creators=list(detail.created_by),
        )
    if detail is not None:
        bundle.update(
            tagline=detail.tagline or None,
            overview=detail.overview or media.overview,
            genres=[genre.name for genre in detail.genres],
        )
    if credits is not None:
        bundle.update(
            cast=first(credits.cast, CAST_COUNT),
            directors=crew_with_job(credits.crew, "Director"),
            executive_producers=crew_with_job(credits.crew, "Executive Producer"),
        )
    if providers is not None:
        bundle["quick_providers"] = match_quick_providers(providers.all_providers())
    return DetailBundle.model_validate(bundle)


class DetailScreen(FeedScreen[DetailBundle]):
    """Detail screen for one media item; built fresh per visit."""

    name = "detail"

    def __init__(
        self,
        client: TMDBClient,
        watchlist: WatchlistStore,
        media: MediaItem,
        region: str,
    ) -> None:
        super().__init__(client)
        self._watchlist = watchlist
        self.media = media
        self.region = region

    async def fetch(self) -> DetailBundle:
        media = self.media
        detail: MovieDetail | TVDetail | None = None
        credits: Credits | None = None
        reviews: list[Review] = []
        providers: WatchProviderRegion | None = None

        # People have no detail, credits, reviews or provider endpoints.
        if media.media_type != "person":
            if media.media_type == "movie":
                detail_call = self._client.fetch_movie_detail(media.id)
            else:
                detail_call = self._client.fetch_tv_detail(media.id)
            detail, credits, reviews, providers = await asyncio.gather(
                detail_call,
                self._client.fetch_credits(media.id, media.media_type),
                self._client.fetch_reviews(media.id, media.media_type),
                self._client.fetch_watch_providers(media.id, media.media_type, self.region),
            )

        in_watchlist = await self._watchlist.contains(media.key)
        return build_detail_bundle(media, detail, credits, reviews, providers, in_watchlist)

    async def toggle_watchlist(self) -> bool:
        """Flip the item's watchlist membership and republish the bundle."""

        member = await self._watchlist.toggle(self.media.media_type, self.media.id)
        current = self._state
        if current.data is not None:
            self._publish(
                ScreenState(
                    status=current.status,
                    data=current.data.model_copy(update={"in_watchlist": member}),
                    error=current.error,
                )
            )
        return member
