"""
Core constants used across the application. Keep these simple and documented.
"""

from typing import Final

# Built-in weights, used until a remote override or a slider moves them
DEFAULT_W_FAV: Final[float] = 3.0
DEFAULT_W_RECENCY: Final[float] = 2.0
DEFAULT_W_PROGRESS: Final[float] = 1.5
DEFAULT_DECAY_DAYS: Final[float] = 7.0
DEFAULT_MAX_ITEMS: Final[int] = 12

MS_PER_DAY: Final[int] = 1000 * 60 * 60 * 24

# Key of the weights object inside the remote configuration payload
REMOTE_WEIGHTS_KEY: Final[str] = "recommendWeights"

# Slider control surface (favorite / recency / progress weights)
SLIDER_FIELDS: Final[tuple[str, ...]] = ("w_fav", "w_recency", "w_progress")
SLIDER_MIN: Final[float] = 0.0
SLIDER_MAX: Final[float] = 5.0
SLIDER_STEP: Final[float] = 0.5

# Redis hashes holding one JSON record per storage key
FAVORITES_KEY: Final[str] = "{prefix}:{user_id}:favorites"
PLAY_RECORDS_KEY: Final[str] = "{prefix}:{user_id}:playrecords"

FOR_YOU_ROW_NAME: Final[str] = "For You"
