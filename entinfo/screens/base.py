"""Screen state containers shared by every screen."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Literal, TypeVar

from pydantic import BaseModel

from ..services.tmdb import TMDBClient, TMDBError

logger = logging.getLogger(__name__)

ScreenStatus = Literal["idle", "loading", "ready", "failed"]

DataT = TypeVar("DataT", bound=BaseModel)

Listener = Callable[["ScreenState[Any]"], None]


@dataclass(frozen=True)
class ScreenState(Generic[DataT]):
    """Snapshot of a screen: its status, last committed data and error."""

    status: ScreenStatus = "idle"
    data: DataT | None = None
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == "loading"

    def to_payload(self) -> dict[str, object]:
        return {
            "status": self.status,
            "error": self.error,
            "data": self.data.model_dump(mode="json") if self.data is not None else None,
        }


class Screen(Generic[DataT]):
    """Owns one screen's state and publishes every change to subscribers.

    Each commit is stamped with a generation number; a result that arrives
    after a newer commit started is dropped instead of overwriting it.
    """

    name = "screen"

    def __init__(self, client: TMDBClient) -> None:
        self._client = client
        self._state: ScreenState[DataT] = ScreenState()
        self._listeners: list[Listener] = []
        self._generation = 0
        self._settled: ScreenState[DataT] = self._state

    @property
    def state(self) -> ScreenState[DataT]:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, state: ScreenState[DataT]) -> None:
        self._state = state
        if not state.is_loading:
            self._settled = state
        for listener in list(self._listeners):
            listener(state)

    def _supersede(self) -> int:
        self._generation += 1
        return self._generation

    async def _commit(
        self, fetch: Callable[[], Awaitable[DataT]]
    ) -> ScreenState[DataT]:
        """Run ``fetch`` and publish its result, or its error, as the new state.

        Returns the outcome of this call; it is only published if no newer
        commit started meanwhile. A failed fetch leaves the previously
        committed data in place, and a cancelled one restores the last
        settled state.
        """

        generation = self._supersede()
        settled = self._settled
        self._publish(ScreenState(status="loading", data=self._state.data))
        try:
            data = await fetch()
        except TMDBError as exc:
            outcome = ScreenState(status="failed", data=settled.data, error=str(exc))
            if generation == self._generation:
                logger.warning("%s screen failed to load: %s", self.name, exc)
                self._publish(outcome)
            return outcome
        except asyncio.CancelledError:
            if generation == self._generation:
                self._publish(settled)
            raise
        except Exception as exc:
            if generation == self._generation:
                logger.exception("%s screen crashed while loading", self.name)
                self._publish(
                    ScreenState(status="failed", data=settled.data, error=str(exc))
                )
            raise
        outcome = ScreenState(status="ready", data=data)
        if generation != self._generation:
            logger.debug("Dropping stale %s result", self.name)
            return outcome
        self._publish(outcome)
        return outcome


class FeedScreen(Screen[DataT], ABC):
    """Screen loaded once per lifecycle, with an explicit reload."""

    def __init__(self, client: TMDBClient) -> None:
        super().__init__(client)
        self._has_loaded = False

    @property
    def has_loaded(self) -> bool:
        return self._has_loaded

    @abstractmethod
    async def fetch(self) -> DataT:
        """Issue this screen's catalog calls and aggregate the results."""

    async def load_if_needed(self) -> None:
        if self._has_loaded or self._state.is_loading:
            return
        await self._load()

    async def reload(self) -> None:
        self._has_loaded = False
        await self._load()

    async def _load(self) -> None:
        outcome = await self._commit(self.fetch)
        if outcome.status == "ready" and outcome is self._state:
            self._has_loaded = True
