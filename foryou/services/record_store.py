from collections.abc import Mapping
from typing import Protocol, TypeVar

from loguru import logger
from pydantic import ValidationError

from foryou.core.config import settings
from foryou.core.constants import FAVORITES_KEY, PLAY_RECORDS_KEY
from foryou.core.security import redact_user
from foryou.models.records import FavoriteEntry, PlayRecordEntry
from foryou.services.redis_service import RedisService, redis_service

EntryT = TypeVar("EntryT", FavoriteEntry, PlayRecordEntry)


class RecordStore(Protocol):
    """Read access to a user's favorites and play history, keyed by storage key."""

    async def get_all_favorites(self) -> dict[str, FavoriteEntry]: ...

    async def get_all_play_records(self) -> dict[str, PlayRecordEntry]: ...


class MemoryRecordStore:
    def __init__(
        self,
        favorites: Mapping[str, FavoriteEntry] | None = None,
        play_records: Mapping[str, PlayRecordEntry] | None = None,
    ):
        self.favorites = dict(favorites or {})
        self.play_records = dict(play_records or {})

    async def get_all_favorites(self) -> dict[str, FavoriteEntry]:
        return dict(self.favorites)

    async def get_all_play_records(self) -> dict[str, PlayRecordEntry]:
        return dict(self.play_records)


class RedisRecordStore:
    """
    Records stored as Redis hashes: one hash per user and record kind, where each
    field is a storage key and each value a JSON-encoded record.
    """

    def __init__(self, user_id: str, redis: RedisService | None = None, prefix: str | None = None):
        self.user_id = user_id
        self.redis = redis or redis_service
        self.prefix = prefix or settings.REDIS_KEY_PREFIX

    def _favorites_key(self) -> str:
        return FAVORITES_KEY.format(prefix=self.prefix, user_id=self.user_id)

    def _play_records_key(self) -> str:
        return PLAY_RECORDS_KEY.format(prefix=self.prefix, user_id=self.user_id)

    async def _load(self, key: str, model: type[EntryT]) -> dict[str, EntryT]:
        raw = await self.redis.get_hash(key)
        entries: dict[str, EntryT] = {}
        for storage_key, value in raw.items():
            try:
                entries[storage_key] = model.model_validate_json(value)
            except ValidationError as e:
                # a single bad record should not hide the rest
                logger.warning(f"[{redact_user(self.user_id)}] Skipping malformed record '{storage_key}': {e}")
        return entries

    async def get_all_favorites(self) -> dict[str, FavoriteEntry]:
        return await self._load(self._favorites_key(), FavoriteEntry)

    async def get_all_play_records(self) -> dict[str, PlayRecordEntry]:
        return await self._load(self._play_records_key(), PlayRecordEntry)


def get_record_store(user_id: str) -> RecordStore:
    """Redis-backed store when Redis is configured, otherwise an empty in-memory one."""
    if redis_service.configured:
        return RedisRecordStore(user_id)
    return MemoryRecordStore()
