from collections.abc import Mapping

from foryou.models.records import Candidate, FavoriteEntry, PlayRecordEntry, RankedItem
from foryou.models.weights import WeightConfig
from foryou.services.recommendation.decay import now_ms
from foryou.services.recommendation.merger import merge_records
from foryou.services.recommendation.scoring import score_candidates


def rank(candidates: list[Candidate], weights: WeightConfig) -> list[Candidate]:
    """
    Order scored candidates by score, then by most recently touched, and cap the length.

    The sort is stable, so remaining ties keep input order. A non-positive max_items
    yields an empty list.
    """
    limit = max(0, weights.max_items)
    ordered = sorted(candidates, key=lambda c: (-c.score, -c.last_touched))
    return ordered[:limit]


def rank_records(
    play_records: Mapping[str, PlayRecordEntry],
    favorites: Mapping[str, FavoriteEntry],
    weights: WeightConfig,
    now: float | None = None,
) -> list[RankedItem]:
    """Full ranking pass (merge, score, sort, cap) against a single clock reading."""
    current = now_ms() if now is None else now
    candidates = merge_records(play_records, favorites, now=current)
    scored = score_candidates(candidates, weights, now=current)
    return [RankedItem.from_candidate(c) for c in rank(scored, weights)]
