"""
For You ranking pipeline: merge favorites and play history, score, sort and cap.
"""

from foryou.services.recommendation.decay import days_since, now_ms, recency_score
from foryou.services.recommendation.merger import identity_key, merge_records
from foryou.services.recommendation.ranker import rank, rank_records
from foryou.services.recommendation.scoring import score_candidate, score_candidates

__all__ = [
    "days_since",
    "now_ms",
    "recency_score",
    "identity_key",
    "merge_records",
    "rank",
    "rank_records",
    "score_candidate",
    "score_candidates",
]
