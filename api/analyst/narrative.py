"""
Deterministic narrative and recommendation templates.

Nothing here generates free text: paragraphs are picked by score tier and
filled with metric values, recommendations come from a fixed catalog.
"""
from typing import Dict, List, Sequence

from .models import HealthScores, Recommendation, TrailingMetrics

# (upper bound exclusive, template); the last tier catches everything above.
NARRATIVE_TEMPLATES = [
    (
        40.0,
        "Aurora rates overall financial health at {overall:.0f}/100, a critical position. "
        "Revenue is compounding at {cagr:.1%} with an average net margin of {net_margin:.1%}, "
        "and cash covers roughly {runway:.1f} months of operating expenses at a burn multiple of "
        "{burn_multiple:.1f}x. {signal_sentence} Stabilising cash and unit economics should take "
        "priority over expansion.",
    ),
    (
        70.0,
        "Aurora rates overall financial health at {overall:.0f}/100, a steady but uneven position. "
        "Revenue is compounding at {cagr:.1%} with an average net margin of {net_margin:.1%}, "
        "and cash covers roughly {runway:.1f} months of operating expenses at a burn multiple of "
        "{burn_multiple:.1f}x. {signal_sentence} Targeted work on the weakest levers can move the "
        "business into a stronger tier.",
    ),
    (
        float("inf"),
        "Aurora rates overall financial health at {overall:.0f}/100, a strong position. "
        "Revenue is compounding at {cagr:.1%} with an average net margin of {net_margin:.1%}, "
        "and cash covers roughly {runway:.1f} months of operating expenses at a burn multiple of "
        "{burn_multiple:.1f}x. {signal_sentence} The foundation supports deliberate investment in "
        "further growth.",
    ),
]

CATEGORY_ORDER = ("growth", "profitability", "liquidity", "efficiency")

RECOMMENDATION_CATALOG: Dict[str, Recommendation] = {
    "growth": Recommendation(
        title="Accelerate revenue momentum",
        highlight="Growth is the weakest pillar; compounding revenue lifts every other score.",
        bullets=[
            "Double down on the acquisition channels with the shortest payback period.",
            "Introduce expansion pricing or upsell tiers for the existing customer base.",
            "Set quarterly revenue growth targets and review pipeline coverage monthly.",
        ],
    ),
    "profitability": Recommendation(
        title="Rebuild margin structure",
        highlight="Margins are not yet converting revenue into durable earnings.",
        bullets=[
            "Audit cost of goods sold for supplier consolidation and volume discounts.",
            "Reprice low-margin products or retire them where contribution is negative.",
            "Tie discretionary operating spend to gross margin milestones.",
        ],
    ),
    "liquidity": Recommendation(
        title="Extend cash runway",
        highlight="Cash reserves leave limited room to absorb a slower quarter.",
        bullets=[
            "Build a 13-week cash forecast and review it weekly with budget owners.",
            "Negotiate longer payables terms and tighten receivables collection.",
            "Line up a credit facility or bridge financing before it is urgently needed.",
        ],
    ),
    "efficiency": Recommendation(
        title="Improve capital efficiency",
        highlight="Cash burn is high relative to the new revenue it produces.",
        bullets=[
            "Rank growth initiatives by burn multiple and pause the least efficient.",
            "Shift spend toward channels with proven customer lifetime value.",
            "Automate repetitive operating workflows to flatten headcount growth.",
        ],
    ),
}

RECOMMENDATION_COUNT = 3


def _signal_sentence(signals: Sequence[str]) -> str:
    if not signals:
        return "No acute risk signals were detected."
    if len(signals) == 1:
        return "One risk signal requires attention."
    return f"{len(signals)} risk signals require attention."


def compose_narrative(
    scores: HealthScores,
    metrics: TrailingMetrics,
    signals: Sequence[str],
) -> str:
    """Tiered health paragraph chosen by the overall score."""
    template = NARRATIVE_TEMPLATES[-1][1]
    for upper, candidate in NARRATIVE_TEMPLATES:
        if scores.overall < upper:
            template = candidate
            break
    return template.format(
        overall=scores.overall,
        cagr=metrics.cagr,
        net_margin=metrics.net_margin,
        runway=metrics.liquidity_ratio,
        burn_multiple=metrics.burn_multiple,
        signal_sentence=_signal_sentence(signals),
    )


def weakest_categories(scores: HealthScores, count: int = RECOMMENDATION_COUNT) -> List[str]:
    """Lowest-scoring categories first; ties keep catalog order."""
    category_scores = scores.categories()
    ranked = sorted(CATEGORY_ORDER, key=lambda c: (category_scores[c], CATEGORY_ORDER.index(c)))
    return ranked[:count]


def build_recommendations(scores: HealthScores) -> List[Recommendation]:
    """Catalog sections for the three weakest categories, weakest first."""
    recommendations = []
    for category in weakest_categories(scores):
        entry = RECOMMENDATION_CATALOG[category]
        # Fresh copies so callers never share the catalog's bullet lists.
        recommendations.append(
            Recommendation(title=entry.title, highlight=entry.highlight, bullets=list(entry.bullets))
        )
    return recommendations
