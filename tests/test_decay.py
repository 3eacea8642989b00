import math

import pytest

from foryou.core.constants import MS_PER_DAY
from foryou.services.recommendation.decay import days_since, recency_score


def test_recency_is_one_at_zero_elapsed_days():
    assert recency_score(0, 7) == 1.0


def test_recency_after_one_horizon_is_exp_minus_one():
    assert recency_score(7, 7) == pytest.approx(math.exp(-1))


def test_recency_strictly_decreases_with_elapsed_days():
    scores = [recency_score(d, 7) for d in (0, 0.5, 1, 3, 7, 30, 365)]
    assert all(a > b for a, b in zip(scores, scores[1:]))


@pytest.mark.parametrize("decay_days", [0, -1, -7.5])
@pytest.mark.parametrize("days", [0, 1, 100])
def test_non_positive_horizon_disables_recency(days, decay_days):
    assert recency_score(days, decay_days) == 0.0


def test_days_since_counts_whole_and_fractional_days(now):
    assert days_since(now - 3 * MS_PER_DAY, now) == pytest.approx(3.0)
    assert days_since(now - MS_PER_DAY / 2, now) == pytest.approx(0.5)


def test_days_since_clamps_future_timestamps_to_zero(now):
    assert days_since(now + 5 * MS_PER_DAY, now) == 0.0


def test_days_since_defaults_to_wall_clock():
    assert days_since(0) > 0
