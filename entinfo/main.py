"""Entry point for the FastAPI service exposing screen state to the TV client."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings
from .database import Database
from .models import MediaItem, MediaType
from .screens import (
    DetailScreen,
    FeedScreen,
    HomeScreen,
    MoviesScreen,
    ScreenState,
    SearchScreen,
    TrendingScreen,
    TVScreen,
)
from .services.tmdb import TMDBClient
from .services.watchlist import DatabaseSlot, WatchlistStore
from .utils import device_region

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScreenRegistry:
    """The long-lived screens and shared collaborators of one app instance."""

    client: TMDBClient
    watchlist: WatchlistStore
    region: str
    feeds: dict[str, FeedScreen[Any]]
    search: SearchScreen

    @classmethod
    def build(
        cls, app_settings: Settings, client: TMDBClient, watchlist: WatchlistStore
    ) -> "ScreenRegistry":
        return cls(
            client=client,
            watchlist=watchlist,
            region=app_settings.region or device_region(),
            feeds={
                "home": HomeScreen(client),
                "movies": MoviesScreen(client),
                "tv": TVScreen(client),
                "trending": TrendingScreen(client),
            },
            search=SearchScreen(client),
        )

    def detail(self, media: MediaItem) -> DetailScreen:
        return DetailScreen(self.client, self.watchlist, media, self.region)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    async with AsyncExitStack() as exit_stack:
        tmdb_http_client = await exit_stack.enter_async_context(
            httpx.AsyncClient(
                base_url=str(settings.tmdb_api_url),
                timeout=httpx.Timeout(settings.request_timeout_seconds, connect=10.0),
            )
        )
        database = Database(settings.database_url)
        exit_stack.push_async_callback(database.dispose)
        await database.create_all()

        client = TMDBClient(settings, tmdb_http_client)
        watchlist = WatchlistStore(DatabaseSlot(database))
        fastapi_app.state.screens = ScreenRegistry.build(settings, client, watchlist)
        fastapi_app.state.database = database
        logger.info("Serving screens for region %s", fastapi_app.state.screens.region)

        yield


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Screen state for a TMDB-powered TV browsing client",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_screens(app: FastAPI) -> ScreenRegistry:
    registry = getattr(app.state, "screens", None)
    if not isinstance(registry, ScreenRegistry):
        raise RuntimeError("Screens not initialised")
    return registry


def _state_response(state: ScreenState[Any]) -> JSONResponse:
    status_code = 502 if state.status == "failed" else 200
    return JSONResponse(state.to_payload(), status_code=status_code)


def register_routes(fastapi_app: FastAPI) -> None:
    def _feed(name: str) -> FeedScreen[Any]:
        screen = get_screens(fastapi_app).feeds.get(name)
        if screen is None:
            raise HTTPException(status_code=404, detail=f"Unknown screen: {name}")
        return screen

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/screens/{name}")
    async def screen_state(name: str) -> JSONResponse:
        screen = _feed(name)
        await screen.load_if_needed()
        return _state_response(screen.state)

    @fastapi_app.post("/screens/{name}/reload")
    async def reload_screen(name: str) -> JSONResponse:
        screen = _feed(name)
        await screen.reload()
        return _state_response(screen.state)

    @fastapi_app.get("/search")
    async def search(query: str = "") -> JSONResponse:
        outcome = await get_screens(fastapi_app).search.search(query)
        return _state_response(outcome)

    @fastapi_app.get("/media/{media_type}/{media_id}")
    async def media_detail(
        media_type: MediaType, media_id: int, title: str = ""
    ) -> JSONResponse:
        media = MediaItem(id=media_id, title=title, media_type=media_type)
        screen = get_screens(fastapi_app).detail(media)
        await screen.load_if_needed()
        return _state_response(screen.state)

    @fastapi_app.post("/media/{media_type}/{media_id}/watchlist")
    async def toggle_watchlist(media_type: MediaType, media_id: int) -> dict[str, Any]:
        watchlist = get_screens(fastapi_app).watchlist
        member = await watchlist.toggle(media_type, media_id)
        return {"key": watchlist.key(media_type, media_id), "in_watchlist": member}

    @fastapi_app.get("/watchlist")
    async def list_watchlist() -> dict[str, list[str]]:
        keys = await get_screens(fastapi_app).watchlist.keys()
        return {"keys": sorted(keys)}


app = create_app()
