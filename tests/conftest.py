import pytest

from foryou.core.constants import MS_PER_DAY
from foryou.models.records import FavoriteEntry, PlayRecordEntry

NOW = 1_700_000_000_000.0


@pytest.fixture
def now() -> float:
    return NOW


@pytest.fixture
def days_ago():
    def _days_ago(days: float) -> float:
        return NOW - days * MS_PER_DAY

    return _days_ago


@pytest.fixture
def make_play_record():
    def _make(title="X", source_name="S", year="2020", play_time=30, total_time=100, save_time=NOW, **extra):
        return PlayRecordEntry(
            title=title,
            cover=extra.pop("cover", f"https://img.example/{title}.jpg"),
            source_name=source_name,
            year=year,
            total_episodes=extra.pop("total_episodes", 10),
            play_time=play_time,
            total_time=total_time,
            save_time=save_time,
            **extra,
        )

    return _make


@pytest.fixture
def make_favorite():
    def _make(title="Y", source_name="S", year="2021", save_time=NOW, **extra):
        return FavoriteEntry(
            title=title,
            cover=extra.pop("cover", f"https://img.example/{title}.jpg"),
            source_name=source_name,
            year=year,
            total_episodes=extra.pop("total_episodes", 24),
            save_time=save_time,
            **extra,
        )

    return _make
