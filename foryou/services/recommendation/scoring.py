from foryou.models.records import Candidate
from foryou.models.weights import WeightConfig
from foryou.services.recommendation.decay import days_since, now_ms, recency_score


def score_candidate(candidate: Candidate, weights: WeightConfig, now: float | None = None) -> float:
    """
    Rank score of a single candidate.

    History candidates: favorite bonus (if flagged) + recency + progress term, where the
    progress term rewards unfinished titles. Favorite-only candidates have no play data,
    so they get the favorite weight plus recency and no progress term.
    """
    recency = weights.w_recency * recency_score(days_since(candidate.last_touched, now), weights.decay_days)
    if candidate.has_play_data:
        favorite = weights.w_fav if candidate.is_favorite else 0.0
        return favorite + recency + weights.w_progress * (1 - candidate.progress_ratio)
    return weights.w_fav + recency


def score_candidates(candidates: list[Candidate], weights: WeightConfig, now: float | None = None) -> list[Candidate]:
    """Return scored copies of the candidates; the inputs are left untouched."""
    current = now_ms() if now is None else now
    return [c.model_copy(update={"score": score_candidate(c, weights, current)}) for c in candidates]
