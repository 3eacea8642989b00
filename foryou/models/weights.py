from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from foryou.core.constants import (
    DEFAULT_DECAY_DAYS,
    DEFAULT_MAX_ITEMS,
    DEFAULT_W_FAV,
    DEFAULT_W_PROGRESS,
    DEFAULT_W_RECENCY,
)


class WeightConfig(BaseModel):
    """
    Coefficients combining favorite status, recency and unfinished progress into a rank score.
    Immutable; every update produces a new instance.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    w_fav: float = Field(default=DEFAULT_W_FAV, alias="wFav")
    w_recency: float = Field(default=DEFAULT_W_RECENCY, alias="wRecency")
    w_progress: float = Field(default=DEFAULT_W_PROGRESS, alias="wProgress")
    decay_days: float = Field(default=DEFAULT_DECAY_DAYS, alias="decayDays")
    max_items: int = Field(default=DEFAULT_MAX_ITEMS, alias="maxItems")


class WeightPhase(str, Enum):
    DEFAULT = "default"
    REMOTE_APPLIED = "remote_applied"
    USER_OVERRIDDEN = "user_overridden"
