"""
Score aggregation used by quality gates.

Agents produce the individual scores; processes only combine them.
"""

from collections.abc import Mapping, Sequence

QUALITY_THRESHOLDS = {"comprehensive": 80, "standard": 70}
DEFAULT_QUALITY_THRESHOLD = 60


def average(values: Sequence[float]) -> float:
    """Arithmetic mean, or 0 for an empty sequence."""
    if not values:
        return 0
    return sum(values) / len(values)


def weighted_score(scores: Mapping[str, float], weights: Mapping[str, float]) -> int:
    """
    Rounded weighted mean over the keys present in both mappings.

    Weights are renormalized over the matching keys, so a missing
    sub-score does not drag the total down.
    """
    matched = [
        (float(scores[key]), float(weight))
        for key, weight in weights.items()
        if isinstance(scores.get(key), int | float)
    ]
    total_weight = sum(weight for _, weight in matched)
    if not matched or total_weight == 0:
        return 0
    return round(sum(score * weight for score, weight in matched) / total_weight)


def quality_threshold(review_scope: str) -> int:
    """Minimum acceptable review score for a review scope."""
    return QUALITY_THRESHOLDS.get(review_scope, DEFAULT_QUALITY_THRESHOLD)
