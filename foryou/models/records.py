from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class FavoriteEntry(BaseModel):
    """A title the user marked as favorite. The storage key is held by the mapping, not the entry."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    title: str = ""
    cover: str = ""
    source_name: str = ""
    year: str = ""
    total_episodes: int = 0
    # epoch milliseconds, 0 when the store did not record it
    save_time: float = 0

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class PlayRecordEntry(FavoriteEntry):
    """A title the user has played, with elapsed and total duration in seconds."""

    play_time: float = 0
    total_time: float = 0


class Candidate(BaseModel):
    """
    One deduplicated recommendation entry, rebuilt on every ranking pass.
    """

    key: str
    title: str
    cover: str
    source_name: str
    year: str
    episodes: int
    progress_ratio: float = 0.0
    is_favorite: bool = False
    has_play_data: bool = False
    # the save time, or "now" when the store has none; drives decay and tie-breaks
    last_touched: float
    score: float = 0.0


class RankedItem(BaseModel):
    """Public view of a ranked candidate as handed to the rendering side."""

    key: str
    title: str
    cover: str
    source_name: str
    year: str
    episodes: int
    progress_ratio: float
    score: float
    remarks: str | None = None

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "RankedItem":
        remarks = None
        if candidate.progress_ratio > 0:
            remarks = f"Watched {candidate.progress_ratio * 100:.0f}%"
        return cls(
            key=candidate.key,
            title=candidate.title,
            cover=candidate.cover,
            source_name=candidate.source_name,
            year=candidate.year,
            episodes=candidate.episodes,
            progress_ratio=candidate.progress_ratio,
            score=candidate.score,
            remarks=remarks,
        )
