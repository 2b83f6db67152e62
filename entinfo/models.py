"""Pydantic models for TMDB payloads and the view-ready records built from them."""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

MediaType = Literal["movie", "tv", "person"]
OfferType = Literal["flatrate", "free", "ads", "rent", "buy"]

OFFER_TYPES: tuple[OfferType, ...] = ("flatrate", "free", "ads", "rent", "buy")

MEDIA_TYPE_LABELS: dict[str, str] = {
    "movie": "Movie",
    "tv": "TV Series",
    "person": "Person",
}


class TMDBModel(BaseModel):
    """Base for every decoded TMDB record.

    TMDB keys are snake_case, which is already the Python attribute style, so
    fields carry their wire names unchanged. Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


RecordT = TypeVar("RecordT", bound=TMDBModel)


class Page(TMDBModel, Generic[RecordT]):
    results: list[RecordT]


class Movie(TMDBModel):
    id: int
    title: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str = ""
    vote_average: float = 0.0


class TVShow(TMDBModel):
    id: int
    name: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str = ""
    vote_average: float = 0.0


class TrendingItem(TMDBModel):
    """Entry of ``/trending`` and ``/search/multi``, which mix media types."""

    id: int
    media_type: MediaType
    title: str | None = None
    name: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str | None = None
    vote_average: float | None = None


class Genre(TMDBModel):
    id: int
    name: str


class Creator(TMDBModel):
    id: int
    name: str
    profile_path: str | None = None


class MovieDetail(TMDBModel):
    id: int
    title: str
    overview: str = ""
    tagline: str | None = None
    release_date: str | None = None
    vote_average: float = 0.0
    genres: list[Genre] = Field(default_factory=list)


class TVDetail(TMDBModel):
    id: int
    name: str
    overview: str = ""
    tagline: str | None = None
    first_air_date: str | None = None
    vote_average: float = 0.0
    genres: list[Genre] = Field(default_factory=list)
    created_by: list[Creator] = Field(default_factory=list)


class CastMember(TMDBModel):
    id: int
    name: str
    character: str | None = None
    profile_path: str | None = None


class CrewMember(TMDBModel):
    id: int
    name: str
    job: str | None = None
    profile_path: str | None = None


class Credits(TMDBModel):
    id: int
    cast: list[CastMember]
    crew: list[CrewMember]


class AuthorDetails(TMDBModel):
    rating: float | None = None
    avatar_path: str | None = None
    name: str | None = None
    username: str | None = None


class Review(TMDBModel):
    id: str
    author: str
    content: str
    author_details: AuthorDetails | None = None


class Reviews(TMDBModel):
    id: int
    results: list[Review]


class WatchProvider(TMDBModel):
    provider_id: int
    provider_name: str
    logo_path: str | None = None
    display_priority: int | None = None


class WatchProviderRegion(TMDBModel):
    """Providers available in one region, grouped by offer type."""

    link: str | None = None
    flatrate: list[WatchProvider] | None = None
    free: list[WatchProvider] | None = None
    ads: list[WatchProvider] | None = None
    rent: list[WatchProvider] | None = None
    buy: list[WatchProvider] | None = None

    def sorted_providers(self, offer: OfferType) -> list[WatchProvider]:
        """Return the providers for ``offer`` ordered by display priority.

        ``sorted`` is stable, so equal priorities keep TMDB's order; providers
        without a priority go last.
        """

        providers = getattr(self, offer) or []
        return sorted(
            providers,
            key=lambda provider: (
                provider.display_priority is None,
                provider.display_priority or 0,
            ),
        )

    def all_providers(self) -> list[WatchProvider]:
        combined: list[WatchProvider] = []
        for offer in OFFER_TYPES:
            combined.extend(self.sorted_providers(offer))
        return combined

    def is_empty(self) -> bool:
        return not any(getattr(self, offer) for offer in OFFER_TYPES)


class WatchProviderResponse(TMDBModel):
    id: int
    results: dict[str, WatchProviderRegion] = Field(default_factory=dict)


class MediaItem(BaseModel):
    """Unified catalog entry shown on every screen."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str = ""
    vote_average: float = 0.0
    media_type: MediaType

    @computed_field  # type: ignore[prop-decorator]
    @property
    def title_text(self) -> str:
        return self.title or "Untitled"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def media_type_label(self) -> str:
        return MEDIA_TYPE_LABELS[self.media_type]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        """Identifier unique across media types, e.g. ``movie-42``."""

        return f"{self.media_type}-{self.id}"

    @classmethod
    def from_movie(cls, movie: Movie) -> "MediaItem":
        return cls(
            id=movie.id,
            title=movie.title,
            poster_path=movie.poster_path,
            backdrop_path=movie.backdrop_path,
            overview=movie.overview,
            vote_average=movie.vote_average,
            media_type="movie",
        )

    @classmethod
    def from_tv(cls, show: TVShow) -> "MediaItem":
        return cls(
            id=show.id,
            title=show.name,
            poster_path=show.poster_path,
            backdrop_path=show.backdrop_path,
            overview=show.overview,
            vote_average=show.vote_average,
            media_type="tv",
        )

    @classmethod
    def from_trending(cls, entry: TrendingItem) -> "MediaItem":
        title = entry.title if entry.title is not None else entry.name
        return cls(
            id=entry.id,
            title=title or "",
            poster_path=entry.poster_path,
            backdrop_path=entry.backdrop_path,
            overview=entry.overview or "",
            vote_average=entry.vote_average or 0.0,
            media_type=entry.media_type,
        )


class QuickProvider(BaseModel):
    """Shortcut from a recognised streaming provider to its website."""

    model_config = ConfigDict(frozen=True)

    provider_id: int
    name: str
    url: str
    logo_path: str | None = None
