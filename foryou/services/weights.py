import math
from collections.abc import Mapping
from typing import Any

from loguru import logger

from foryou.core.constants import REMOTE_WEIGHTS_KEY, SLIDER_FIELDS, SLIDER_MAX, SLIDER_MIN, SLIDER_STEP
from foryou.models.weights import WeightConfig, WeightPhase

# Accept both wire aliases (wFav) and field names (w_fav)
_FIELD_BY_KEY: dict[str, str] = {}
for _name, _field in WeightConfig.model_fields.items():
    _FIELD_BY_KEY[_name] = _name
    if _field.alias:
        _FIELD_BY_KEY[_field.alias] = _name


def resolve_field(key: str) -> str | None:
    return _FIELD_BY_KEY.get(key)


def coerce_number(value: Any) -> float | None:
    """Finite number from an int, float or numeric string; None for anything else (bools included)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def apply_partial(current: WeightConfig, patch: Mapping[str, Any]) -> WeightConfig:
    """
    Merge a partial weight patch into the current configuration.

    Known numeric fields replace the current value; unknown, missing or non-numeric
    fields keep the current value, never the built-in default.
    """
    updates: dict[str, float | int] = {}
    for key, raw in patch.items():
        name = resolve_field(key)
        if name is None:
            logger.debug(f"Ignoring unknown weight field '{key}'")
            continue
        number = coerce_number(raw)
        if number is None:
            logger.debug(f"Ignoring non-numeric value for weight '{key}': {raw!r}")
            continue
        updates[name] = int(number) if name == "max_items" else number

    if not updates:
        return current
    return current.model_copy(update=updates)


def parse_remote_weights(payload: Any) -> dict[str, Any] | None:
    """Extract the weights object from a remote configuration body, or None when it has none."""
    if not isinstance(payload, dict):
        return None
    weights = payload.get(REMOTE_WEIGHTS_KEY)
    if not isinstance(weights, dict):
        return None
    return dict(weights)


def snap_slider_value(value: float) -> float:
    """Clamp to the slider range and round to the slider step."""
    clamped = min(SLIDER_MAX, max(SLIDER_MIN, value))
    return round(clamped / SLIDER_STEP) * SLIDER_STEP


class WeightState:
    """
    Active weight configuration for one feed session.

    Starts at the built-in defaults, may take one remote override and any number of
    slider edits. Slider edits win: a remote response that resolves after the user
    moved a slider only fills the fields the user has not touched.
    """

    def __init__(self, weights: WeightConfig | None = None):
        self.weights = weights or WeightConfig()
        self.phase = WeightPhase.DEFAULT
        self._user_fields: set[str] = set()

    def apply_remote(self, payload: Any) -> bool:
        patch = parse_remote_weights(payload)
        if patch is None:
            logger.debug(f"Remote configuration has no '{REMOTE_WEIGHTS_KEY}' object, keeping current weights")
            return False

        untouched = {k: v for k, v in patch.items() if resolve_field(k) not in self._user_fields}
        self.weights = apply_partial(self.weights, untouched)
        if self.phase is WeightPhase.DEFAULT:
            self.phase = WeightPhase.REMOTE_APPLIED
        logger.info(f"Applied remote weights: {self.weights.model_dump(by_alias=True)}")
        return True

    def apply_user(self, field: str, value: Any) -> WeightConfig:
        name = resolve_field(field)
        if name not in SLIDER_FIELDS:
            raise ValueError(f"Unknown slider field: {field}")
        number = coerce_number(value)
        if number is None:
            raise ValueError(f"Slider value for {field} must be a number")

        self.weights = self.weights.model_copy(update={name: snap_slider_value(number)})
        self._user_fields.add(name)
        self.phase = WeightPhase.USER_OVERRIDDEN
        return self.weights
