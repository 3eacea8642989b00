from collections.abc import Mapping

from loguru import logger

from foryou.models.records import Candidate, FavoriteEntry, PlayRecordEntry
from foryou.services.recommendation.decay import now_ms


def identity_key(entry: FavoriteEntry) -> tuple[str, str, str]:
    """Logical identity of a title. Storage keys differ between favorites and history for the same title."""
    return (entry.title, entry.source_name, entry.year)


def progress_ratio(record: PlayRecordEntry) -> float:
    if record.total_time > 0:
        return min(1.0, max(0.0, record.play_time) / record.total_time)
    return 0.0


def merge_records(
    play_records: Mapping[str, PlayRecordEntry],
    favorites: Mapping[str, FavoriteEntry],
    now: float | None = None,
) -> list[Candidate]:
    """
    Build exactly one Candidate per logical identity.

    History is walked first so its data wins over a favorite entry for the same title;
    among duplicate history entries the first one in mapping order wins. A history
    candidate is flagged favorite when its own storage key is also a favorite key.
    Entries without a save time are treated as touched now.
    """
    current = now_ms() if now is None else now
    favorite_keys = set(favorites)
    seen: set[tuple[str, str, str]] = set()
    candidates: list[Candidate] = []

    for key, record in play_records.items():
        identity = identity_key(record)
        if identity in seen:
            continue
        seen.add(identity)
        candidates.append(
            Candidate(
                key=key,
                title=record.title,
                cover=record.cover,
                source_name=record.source_name,
                year=record.year,
                episodes=record.total_episodes or 1,
                progress_ratio=progress_ratio(record),
                is_favorite=key in favorite_keys,
                has_play_data=True,
                last_touched=record.save_time or current,
            )
        )

    for key, favorite in favorites.items():
        identity = identity_key(favorite)
        if identity in seen:
            continue
        seen.add(identity)
        candidates.append(
            Candidate(
                key=key,
                title=favorite.title,
                cover=favorite.cover,
                source_name=favorite.source_name,
                year=favorite.year,
                episodes=favorite.total_episodes or 1,
                is_favorite=True,
                last_touched=favorite.save_time or current,
            )
        )

    logger.debug(
        f"Merged {len(play_records)} play records and {len(favorites)} favorites into {len(candidates)} candidates"
    )
    return candidates
