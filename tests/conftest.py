"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Ensure the ``entinfo`` package is importable when running tests without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from entinfo.config import Settings  # noqa: E402
from entinfo.services.tmdb import TMDBClient  # noqa: E402

API_BASE_URL = "https://api.example.com/3"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


def build_settings(**overrides: Any) -> Settings:
    """Return a settings object with defaults suitable for tests."""

    base: dict[str, Any] = {"TMDB_API_KEY": "test-key", "TMDB_REGION": "US"}
    base.update(overrides)
    return Settings(_env_file=None, **base)  # type: ignore[arg-type]


def build_client(handler: Handler, **overrides: Any) -> TMDBClient:
    """Return a TMDB client whose HTTP traffic is served by ``handler``."""

    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url=API_BASE_URL
    )
    return TMDBClient(build_settings(**overrides), http_client)


def route(payloads: dict[str, Any], requests: list[httpx.Request] | None = None) -> Handler:
    """Serve JSON by request path (relative to ``/3``); ints are error statuses."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        path = request.url.path.removeprefix("/3")
        payload = payloads.get(path)
        if payload is None:
            return httpx.Response(404, json={"status_message": "not found"})
        if isinstance(payload, int):
            return httpx.Response(payload, json={"status_message": "error"})
        return httpx.Response(200, json=payload)

    return handler


def movie(movie_id: int, title: str, vote: float = 7.0) -> dict[str, Any]:
    return {
        "id": movie_id,
        "title": title,
        "poster_path": f"/p{movie_id}.jpg",
        "backdrop_path": None,
        "overview": f"{title} overview",
        "vote_average": vote,
    }


def show(show_id: int, name: str, vote: float = 7.0) -> dict[str, Any]:
    return {
        "id": show_id,
        "name": name,
        "poster_path": None,
        "overview": "",
        "vote_average": vote,
    }


def trending(entry_id: int, media_type: str, title: str | None = None) -> dict[str, Any]:
    key = "title" if media_type == "movie" else "name"
    return {
        "id": entry_id,
        "media_type": media_type,
        key: title or f"{media_type} {entry_id}",
        "vote_average": 6.5,
    }
