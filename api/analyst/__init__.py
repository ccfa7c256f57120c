"""Rule-based financial analysis: metrics, scenario projection, health scores and narrative."""
from .engine import run_analysis
from .models import (
    AnalysisResult,
    FinancialPeriod,
    HealthScores,
    Recommendation,
    ScenarioAssumptions,
    ScenarioYear,
    TrailingMetrics,
)

__all__ = [
    "AnalysisResult",
    "FinancialPeriod",
    "HealthScores",
    "Recommendation",
    "ScenarioAssumptions",
    "ScenarioYear",
    "TrailingMetrics",
    "run_analysis",
]
