from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .models import FinancialPeriod, TrailingMetrics

RISK_THRESHOLDS: Dict[str, float] = {
    "net_margin_floor": 0.0,
    "leverage_ceiling": 0.7,
    "runway_floor_months": 3.0,
    "burn_multiple_ceiling": 2.0,
}

NEGATIVE_MARGIN_SIGNAL = (
    "Net margin is negative across the trailing periods; the business is not yet covering its cost base."
)
LEVERAGE_SIGNAL = "Liabilities exceed 70% of assets; balance sheet leverage limits flexibility."
RUNWAY_SIGNAL = "Cash covers fewer than 3 months of operating expenses; runway is critically short."
BURN_SIGNAL = "Burn multiple above 2x: each dollar of new revenue is consuming more than two dollars of cash."
CASH_TRAJECTORY_SIGNAL = "Free cash flow has been negative for two consecutive periods and is deteriorating."

Rule = Tuple[str, Callable[[TrailingMetrics, Sequence[FinancialPeriod], Mapping[str, float]], bool]]


def _cash_trajectory_worsening(periods: Sequence[FinancialPeriod]) -> bool:
    """True when the last two free cash flows are negative and the latest is lower."""
    if len(periods) < 2:
        return False
    prev, last = periods[-2].free_cash_flow, periods[-1].free_cash_flow
    return prev < 0 and last < 0 and last < prev


# Evaluation order is output order.
RISK_RULES: List[Rule] = [
    (NEGATIVE_MARGIN_SIGNAL, lambda m, p, t: m.net_margin < t["net_margin_floor"]),
    (LEVERAGE_SIGNAL, lambda m, p, t: m.leverage_ratio > t["leverage_ceiling"]),
    (RUNWAY_SIGNAL, lambda m, p, t: m.liquidity_ratio < t["runway_floor_months"]),
    (BURN_SIGNAL, lambda m, p, t: m.burn_multiple > t["burn_multiple_ceiling"]),
    (CASH_TRAJECTORY_SIGNAL, lambda m, p, t: _cash_trajectory_worsening(p)),
]


def detect_risks(
    metrics: TrailingMetrics,
    periods: Sequence[FinancialPeriod],
    thresholds: Optional[Mapping[str, float]] = None,
) -> List[str]:
    """Return the warning text of every rule that fires; empty means no acute risk."""
    limits = {**RISK_THRESHOLDS, **(thresholds or {})}
    return [message for message, predicate in RISK_RULES if predicate(metrics, periods, limits)]
