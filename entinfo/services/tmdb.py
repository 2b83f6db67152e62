"""Client for The Movie Database (TMDB) REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..models import (
    Credits,
    MediaType,
    Movie,
    MovieDetail,
    Page,
    Review,
    Reviews,
    TrendingItem,
    TVDetail,
    TVShow,
    WatchProviderRegion,
    WatchProviderResponse,
)

logger = logging.getLogger(__name__)

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w342"
IMAGE_BASE_URL_LARGE = "https://image.tmdb.org/t/p/w780"
PROFILE_BASE_URL = "https://image.tmdb.org/t/p/w185"
LOGO_BASE_URL = "https://image.tmdb.org/t/p/w92"

ModelT = TypeVar("ModelT", bound=BaseModel)


class TMDBError(Exception):
    """Base class for every failure surfaced by :class:`TMDBClient`."""

    kind = "tmdb_error"
    message = "TMDB request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class MissingAPIKeyError(TMDBError):
    kind = "missing_credential"
    message = (
        "Missing TMDB API key. Set TMDB_API_KEY in the environment, "
        "a .env file, or the bundled configuration."
    )


class InvalidURLError(TMDBError):
    kind = "invalid_request"
    message = "Invalid TMDB URL."


class InvalidResponseError(TMDBError):
    kind = "invalid_response"
    message = "Unexpected response from TMDB."


class TMDBHTTPError(TMDBError):
    kind = "http_error"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"TMDB request failed with status code {status_code}.")
        self.status_code = status_code


class DecodingFailedError(TMDBError):
    kind = "decode_failed"
    message = "Failed to decode TMDB response."


class TMDBNetworkError(TMDBError):
    kind = "network_failure"

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Network error: {str(cause) or cause.__class__.__name__}")
        self.cause = cause


@dataclass(frozen=True, slots=True)
class CatalogCredential:
    """A TMDB credential: a v3 API key or a v4 read access token.

    v4 tokens are JWTs and therefore always contain a dot.
    """

    token: str

    @property
    def is_bearer(self) -> bool:
        return "." in self.token

    def apply(self, params: dict[str, Any], headers: dict[str, str]) -> None:
        if self.is_bearer:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            params["api_key"] = self.token


def image_url(path: str | None, *, large: bool = False) -> str | None:
    """Return the poster/backdrop URL for ``path`` in the requested tier."""

    return _build_image_url(path, IMAGE_BASE_URL_LARGE if large else IMAGE_BASE_URL)


def profile_url(path: str | None) -> str | None:
    return _build_image_url(path, PROFILE_BASE_URL)


def logo_url(path: str | None) -> str | None:
    return _build_image_url(path, LOGO_BASE_URL)


def _build_image_url(path: str | None, base_url: str) -> str | None:
    if not path:
        return None
    if path.startswith("http"):
        return path
    return f"{base_url}{path}"


class TMDBClient:
    """Thin typed wrapper around the TMDB HTTP API."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    def _credential(self) -> CatalogCredential:
        if not self._settings.tmdb_api_key:
            raise MissingAPIKeyError()
        return CatalogCredential(self._settings.tmdb_api_key)

    async def fetch(
        self,
        path: str,
        model: type[ModelT],
        params: Mapping[str, Any] | None = None,
    ) -> ModelT:
        """GET ``path`` and decode the JSON body into ``model``.

        Raises exactly one :class:`TMDBError` subclass on failure.
        """

        credential = self._credential()
        query: dict[str, Any] = dict(params or {})
        headers = {"Accept": "application/json"}
        credential.apply(query, headers)

        try:
            request = self._client.build_request("GET", path, params=query, headers=headers)
        except httpx.InvalidURL as exc:
            raise InvalidURLError() from exc

        logger.debug("TMDB GET %s", path)
        try:
            response = await self._client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise InvalidURLError() from exc
        except (httpx.RemoteProtocolError, httpx.DecodingError) as exc:
            raise InvalidResponseError() from exc
        except httpx.HTTPError as exc:
            logger.warning("TMDB request to %s failed: %s", path, exc)
            raise TMDBNetworkError(exc) from exc

        if not 200 <= response.status_code < 300:
            logger.warning(
                "TMDB request to %s returned %s", path, response.status_code
            )
            raise TMDBHTTPError(response.status_code)

        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("Unexpected TMDB payload for %s: %s", path, exc)
            raise DecodingFailedError() from exc

    def _listing_params(self) -> dict[str, Any]:
        return {"language": self._settings.tmdb_language, "page": 1}

    async def fetch_trending(self) -> list[TrendingItem]:
        page = await self.fetch("/trending/all/day", Page[TrendingItem])
        return page.results

    async def fetch_top_rated_movies(self) -> list[Movie]:
        page = await self.fetch("/movie/top_rated", Page[Movie], self._listing_params())
        return page.results

    async def fetch_top_rated_tv(self) -> list[TVShow]:
        page = await self.fetch("/tv/top_rated", Page[TVShow], self._listing_params())
        return page.results

    async def fetch_popular_movies(self) -> list[Movie]:
        page = await self.fetch("/movie/popular", Page[Movie], self._listing_params())
        return page.results

    async def fetch_popular_tv(self) -> list[TVShow]:
        page = await self.fetch("/tv/popular", Page[TVShow], self._listing_params())
        return page.results

    async def fetch_movie_detail(self, movie_id: int) -> MovieDetail:
        return await self.fetch(
            f"/movie/{movie_id}", MovieDetail, {"language": self._settings.tmdb_language}
        )

    async def fetch_tv_detail(self, tv_id: int) -> TVDetail:
        return await self.fetch(
            f"/tv/{tv_id}", TVDetail, {"language": self._settings.tmdb_language}
        )

    async def fetch_credits(self, media_id: int, media_type: MediaType) -> Credits:
        return await self.fetch(
            f"{self._media_path(media_type, media_id)}/credits",
            Credits,
            {"language": self._settings.tmdb_language},
        )

    async def fetch_reviews(self, media_id: int, media_type: MediaType) -> list[Review]:
        reviews = await self.fetch(
            f"{self._media_path(media_type, media_id)}/reviews",
            Reviews,
            self._listing_params(),
        )
        return reviews.results

    async def fetch_watch_providers(
        self, media_id: int, media_type: MediaType, region: str
    ) -> WatchProviderRegion | None:
        """Return the provider bundle for ``region``, ``None`` if TMDB has none."""

        response = await self.fetch(
            f"{self._media_path(media_type, media_id)}/watch/providers",
            WatchProviderResponse,
        )
        return response.results.get(region.upper())

    async def search_multi(self, query: str) -> list[TrendingItem]:
        params = {
            "query": query,
            "include_adult": "false",
            "language": self._settings.tmdb_language,
            "page": 1,
        }
        page = await self.fetch("/search/multi", Page[TrendingItem], params)
        return page.results

    @staticmethod
    def _media_path(media_type: MediaType, media_id: int) -> str:
        if media_type not in ("movie", "tv"):
            raise InvalidURLError(f"TMDB has no {media_type} endpoint for this call.")
        return f"/{media_type}/{media_id}"
