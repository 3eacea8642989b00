import asyncio
import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache
from loguru import logger

from foryou.core.config import settings
from foryou.core.constants import FOR_YOU_ROW_NAME
from foryou.core.security import redact_user
from foryou.models.records import FavoriteEntry, PlayRecordEntry, RankedItem
from foryou.models.weights import WeightConfig, WeightPhase
from foryou.services.record_store import RecordStore, get_record_store
from foryou.services.recommendation.ranker import rank_records
from foryou.services.remote_config import RemoteWeightsClient
from foryou.services.weights import WeightState


class ForYouFeed:
    """
    One "For You" session: the loaded records, the active weights, and the ranking over them.

    start() issues the record load and the remote weight fetch as independent tasks.
    Their results are only applied while the generation they were started under is
    still current; close() retires the session so late results are dropped.
    """

    def __init__(
        self,
        store: RecordStore,
        remote: RemoteWeightsClient | None = None,
        weights: WeightConfig | None = None,
        label: str = "",
    ):
        self.store = store
        self.remote = remote
        self.state = WeightState(weights)
        self.label = label
        self.favorites: dict[str, FavoriteEntry] = {}
        self.play_records: dict[str, PlayRecordEntry] = {}
        self.closed = False
        self._generation = 0
        self._tasks: list[asyncio.Task] = []

    @property
    def weights(self) -> WeightConfig:
        return self.state.weights

    @property
    def phase(self) -> WeightPhase:
        return self.state.phase

    def _is_current(self, generation: int) -> bool:
        return not self.closed and generation == self._generation

    def start(self) -> None:
        """Issue the record load and remote fetch. Must be called from a running event loop."""
        if self.closed:
            raise RuntimeError("Feed has been closed")
        generation = self._generation
        self._tasks = [asyncio.create_task(self._load_records(generation))]
        if self.remote is not None:
            self._tasks.append(asyncio.create_task(self._load_remote_weights(generation)))

    async def wait_ready(self) -> None:
        """Wait for the startup loads. Safe to call repeatedly and after close()."""
        # finished tasks may belong to a loop that no longer runs
        pending = [task for task in self._tasks if not task.done()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _load_records(self, generation: int) -> None:
        try:
            favorites, play_records = await asyncio.gather(
                self.store.get_all_favorites(),
                self.store.get_all_play_records(),
            )
        except Exception as e:
            logger.warning(f"[{self.label}] Failed to load records, continuing with none: {e}")
            favorites, play_records = {}, {}

        if not self._is_current(generation):
            logger.debug(f"[{self.label}] Discarding records loaded for a closed feed")
            return
        self.favorites = dict(favorites or {})
        self.play_records = dict(play_records or {})
        logger.info(f"[{self.label}] Loaded {len(self.favorites)} favorites, {len(self.play_records)} play records")

    async def _load_remote_weights(self, generation: int) -> None:
        payload = await self.remote.fetch()
        if payload is None:
            return
        if not self._is_current(generation):
            logger.debug(f"[{self.label}] Discarding remote weights fetched for a closed feed")
            return
        self.state.apply_remote(payload)

    def items(self, now: float | None = None) -> list[RankedItem]:
        """Rank the current records under the current weights."""
        return rank_records(self.play_records, self.favorites, self.weights, now=now)

    def set_weight(self, field: str, value: Any) -> list[RankedItem]:
        """Apply a slider change and return the re-ranked list."""
        self.state.apply_user(field, value)
        return self.items()

    def snapshot(self, now: float | None = None) -> dict[str, Any]:
        return {
            "name": FOR_YOU_ROW_NAME,
            "items": [item.model_dump() for item in self.items(now)],
            "weights": self.weights.model_dump(by_alias=True),
            "phase": self.phase.value,
        }

    def close(self) -> None:
        self.closed = True
        self._generation += 1
        for task in self._tasks:
            if not task.done():
                task.cancel()


class _FeedSessions(TTLCache):
    """TTLCache that closes feeds it evicts, whether by size or by age."""

    def popitem(self):
        user_id, feed = super().popitem()
        feed.close()
        logger.info(f"[{feed.label}] Evicted feed session")
        return user_id, feed

    def expire(self, time=None):
        expired = super().expire(time)
        for _, feed in expired:
            feed.close()
            logger.info(f"[{feed.label}] Feed session expired")
        return expired


class FeedRegistry:
    """
    In-memory feed sessions per user, bounded in count and age. Nothing is persisted;
    a dropped or evicted session starts over at default weights.
    """

    def __init__(
        self,
        remote: RemoteWeightsClient | None = None,
        store_factory: Callable[[str], RecordStore] = get_record_store,
        max_sessions: int | None = None,
        session_ttl: float | None = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.remote = remote
        self.store_factory = store_factory
        self._feeds: _FeedSessions = _FeedSessions(
            maxsize=max_sessions or settings.FEED_MAX_SESSIONS,
            ttl=session_ttl or settings.FEED_SESSION_TTL_SECONDS,
            timer=timer,
        )

    def __len__(self) -> int:
        return len(self._feeds)

    async def get_feed(self, user_id: str) -> ForYouFeed:
        feed = self._feeds.get(user_id)
        if feed is None:
            feed = ForYouFeed(self.store_factory(user_id), self.remote, label=redact_user(user_id))
            self._feeds[user_id] = feed
            feed.start()
            logger.info(f"[{redact_user(user_id)}] Started feed session")
        await feed.wait_ready()
        return feed

    def drop(self, user_id: str) -> bool:
        feed = self._feeds.pop(user_id, None)
        if feed is None:
            return False
        feed.close()
        logger.info(f"[{redact_user(user_id)}] Closed feed session")
        return True

    async def close(self) -> None:
        self._feeds.expire()
        for user_id in list(self._feeds):
            self.drop(user_id)
        if self.remote is not None:
            await self.remote.close()


feed_registry = FeedRegistry(remote=RemoteWeightsClient())


def get_feed_registry() -> FeedRegistry:
    return feed_registry
