"""Maps qualitative ratings (poor/average/good/excellent) to 0-100 sub-scores."""

from typing import Any, Optional

from authenticity_system.config.scoring_policy import DEFAULT_POLICY, ScoringPolicy


def score_quality(rating: Any, policy: Optional[ScoringPolicy] = None) -> int:
    """
    Convert a quality rating to a numeric sub-score.

    Lookup is case-insensitive. Anything outside the table, including None
    and the empty string, scores as "average".

    Args:
        rating: Rating string or QualityRating member
        policy: Scoring policy supplying the table (default policy if None)

    Returns:
        Sub-score on the 0-100 scale

    Example:
        >>> score_quality("Excellent")
        95
        >>> score_quality("blurry")
        50
    """
    policy = policy or DEFAULT_POLICY
    value = getattr(rating, "value", rating)
    if not isinstance(value, str):
        return policy.default_quality_score
    return policy.quality_scores.get(
        value.strip().lower(), policy.default_quality_score
    )
