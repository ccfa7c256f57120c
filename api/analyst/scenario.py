import math
import sys
from typing import List

from .metrics import _clamp, _finite, _safe_div
from .models import FinancialPeriod, ScenarioAssumptions, ScenarioYear, TrailingMetrics

# Fixed so the payload shape never changes for consumers.
SCENARIO_HORIZON = 3


def _year_label(index: int) -> str:
    return f"Year {index}"


def _saturate(value: float) -> float:
    """Pin overflowing values to the largest finite float so ordering survives; NaN becomes 0."""
    if math.isnan(value):
        return 0.0
    return max(-sys.float_info.max, min(sys.float_info.max, value))


def effective_drivers(
    last_period: FinancialPeriod,
    metrics: TrailingMetrics,
    assumptions: ScenarioAssumptions,
) -> dict:
    """Blend trailing trend with assumption deltas (percentage points -> fractions)."""
    growth = _finite(metrics.growth_velocity + assumptions.revenue_growth / 100)
    margin = _clamp(_finite(metrics.net_margin + assumptions.margin_shift / 100), -1.0, 1.0)
    base_fcf_ratio = _finite(_safe_div(last_period.free_cash_flow, last_period.revenue))
    fcf_shift = (assumptions.efficiency_gain + assumptions.cash_conversion) / 100
    fcf_ratio = _clamp(_finite(base_fcf_ratio + fcf_shift), -1.0, 1.0)
    return {"revenue_growth": growth, "net_margin": margin, "fcf_ratio": fcf_ratio}


def project_scenario(
    last_period: FinancialPeriod,
    metrics: TrailingMetrics,
    assumptions: ScenarioAssumptions,
) -> List[ScenarioYear]:
    """
    Compound the latest revenue forward SCENARIO_HORIZON years.

    Net income and free cash flow are held at constant ratios of projected
    revenue. Output is deterministic for equal inputs.
    """
    drivers = effective_drivers(last_period, metrics, assumptions)
    running_revenue = last_period.revenue
    years: List[ScenarioYear] = []
    for period_idx in range(1, SCENARIO_HORIZON + 1):
        running_revenue = _saturate(running_revenue * (1 + drivers["revenue_growth"]))
        years.append(
            ScenarioYear(
                year=_year_label(period_idx),
                revenue=running_revenue,
                net_income=_finite(running_revenue * drivers["net_margin"]),
                free_cash_flow=_finite(running_revenue * drivers["fcf_ratio"]),
            )
        )
    return years
