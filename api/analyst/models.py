from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class FinancialPeriod:
    label: str = "Period"
    revenue: float = 0.0
    cogs: float = 0.0
    operating_expenses: float = 0.0
    net_income: float = 0.0
    assets: float = 0.0
    liabilities: float = 0.0
    cash: float = 0.0
    free_cash_flow: float = 0.0


@dataclass(frozen=True)
class ScenarioAssumptions:
    """Percentage-point deltas layered on the trailing trend (5 means +5pp)."""

    revenue_growth: float = 0.0
    margin_shift: float = 0.0
    efficiency_gain: float = 0.0
    cash_conversion: float = 0.0


# Slider limits exposed to callers; the engine itself accepts any finite value.
ASSUMPTION_BOUNDS: Dict[str, Dict[str, float]] = {
    "revenueGrowth": {"min": -20.0, "max": 20.0, "step": 0.5},
    "marginShift": {"min": -10.0, "max": 15.0, "step": 0.5},
    "efficiencyGain": {"min": -20.0, "max": 15.0, "step": 0.5},
    "cashConversion": {"min": -20.0, "max": 15.0, "step": 0.5},
}


@dataclass(frozen=True)
class TrailingMetrics:
    cagr: float = 0.0
    net_margin: float = 0.0
    burn_multiple: float = 0.0
    leverage_ratio: float = 0.0
    liquidity_ratio: float = 0.0
    growth_velocity: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "cagr": self.cagr,
            "netMargin": self.net_margin,
            "burnMultiple": self.burn_multiple,
            "leverageRatio": self.leverage_ratio,
            "liquidityRatio": self.liquidity_ratio,
            "growthVelocity": self.growth_velocity,
        }


@dataclass(frozen=True)
class ScenarioYear:
    year: str
    revenue: float
    net_income: float
    free_cash_flow: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "revenue": self.revenue,
            "netIncome": self.net_income,
            "freeCashFlow": self.free_cash_flow,
        }


@dataclass(frozen=True)
class HealthScores:
    overall: float
    growth: float
    profitability: float
    liquidity: float
    efficiency: float

    def categories(self) -> Dict[str, float]:
        """Category scores without the overall roll-up, in catalog order."""
        return {
            "growth": self.growth,
            "profitability": self.profitability,
            "liquidity": self.liquidity,
            "efficiency": self.efficiency,
        }


@dataclass(frozen=True)
class Recommendation:
    title: str
    highlight: str
    bullets: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    metrics: TrailingMetrics
    scenario: List[ScenarioYear]
    health_scores: HealthScores
    risk_signals: List[str]
    narrative: str
    recommendations: List[Recommendation]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase payload returned over the wire."""
        return {
            "metrics": self.metrics.to_dict(),
            "scenario": [year.to_dict() for year in self.scenario],
            "healthScores": asdict(self.health_scores),
            "riskSignals": list(self.risk_signals),
            "narrative": self.narrative,
            "recommendations": [asdict(rec) for rec in self.recommendations],
        }
