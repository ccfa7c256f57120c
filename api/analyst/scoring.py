from typing import Dict, Mapping, Optional

from .metrics import _clamp, _finite
from .models import HealthScores, TrailingMetrics

# Reference points per category: metric value scoring 0 ("bad") and 100 ("good").
# When good < bad the mapping is inverted (lower metric is better).
SCORE_BANDS: Dict[str, Dict] = {
    "growth": {"metric": "cagr", "bad": -0.10, "good": 0.40},
    "profitability": {"metric": "net_margin", "bad": -0.20, "good": 0.25},
    "liquidity": {"metric": "liquidity_ratio", "bad": 1.0, "good": 18.0},
    "efficiency": {"metric": "burn_multiple", "bad": 4.0, "good": 0.5},
}

SCORE_WEIGHTS: Dict[str, float] = {
    "growth": 0.3,
    "profitability": 0.3,
    "liquidity": 0.2,
    "efficiency": 0.2,
}


def scale_score(value: float, bad: float, good: float) -> float:
    """Linear map of value onto [0, 100] between the bad and good reference points."""
    if bad == good:
        return 100.0 if value >= good else 0.0
    fraction = (value - bad) / (good - bad)
    return _clamp(_finite(fraction * 100), 0.0, 100.0)


def score_health(
    metrics: TrailingMetrics,
    bands: Optional[Mapping[str, Mapping]] = None,
    weights: Optional[Mapping[str, float]] = None,
) -> HealthScores:
    """Score each category against its band and blend them into a weighted overall."""
    bands = bands or SCORE_BANDS
    weights = weights or SCORE_WEIGHTS

    scores: Dict[str, float] = {}
    for category, band in bands.items():
        value = getattr(metrics, band["metric"])
        scores[category] = float(round(scale_score(value, band["bad"], band["good"])))

    total_weight = sum(weights.get(category, 0.0) for category in scores)
    if total_weight > 0:
        blended = sum(scores[c] * weights.get(c, 0.0) for c in scores) / total_weight
    else:
        blended = 0.0
    overall = _clamp(float(round(blended)), 0.0, 100.0)

    return HealthScores(
        overall=overall,
        growth=scores.get("growth", 0.0),
        profitability=scores.get("profitability", 0.0),
        liquidity=scores.get("liquidity", 0.0),
        efficiency=scores.get("efficiency", 0.0),
    )
