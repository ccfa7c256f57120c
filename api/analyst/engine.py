from typing import Optional, Sequence

from .metrics import compute_metrics
from .models import AnalysisResult, FinancialPeriod, ScenarioAssumptions
from .narrative import build_recommendations, compose_narrative
from .risk import detect_risks
from .scenario import project_scenario
from .scoring import score_health


def run_analysis(
    periods: Sequence[FinancialPeriod],
    assumptions: Optional[ScenarioAssumptions] = None,
) -> AnalysisResult:
    """
    Run the full pipeline over sanitized input.

    Callers must reject an empty period sequence before calling; beyond
    that the pipeline does not raise for finite input.
    """
    if not periods:
        raise ValueError("run_analysis requires at least one financial period")
    assumptions = assumptions or ScenarioAssumptions()

    metrics = compute_metrics(periods)
    scenario = project_scenario(periods[-1], metrics, assumptions)
    scores = score_health(metrics)
    signals = detect_risks(metrics, periods)

    return AnalysisResult(
        metrics=metrics,
        scenario=scenario,
        health_scores=scores,
        risk_signals=signals,
        narrative=compose_narrative(scores, metrics, signals),
        recommendations=build_recommendations(scores),
    )
