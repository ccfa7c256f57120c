import math
from typing import List, Optional, Sequence

from .models import FinancialPeriod, TrailingMetrics

# Caps keep extreme ratios from dominating downstream scoring.
BURN_MULTIPLE_CAP = 50.0
LEVERAGE_CAP = 5.0
LIQUIDITY_CAP_MONTHS = 60.0


def _finite(value: Optional[float]) -> float:
    """Collapse None, NaN and +/-inf to 0."""
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _safe_div(num: Optional[float], den: Optional[float]) -> Optional[float]:
    """Safe division returning None if invalid."""
    if num is None or den is None or den == 0:
        return None
    return num / den


def _compute_growth(current: float, previous: float) -> Optional[float]:
    """Compute period-over-period growth rate."""
    if previous == 0:
        return None
    return (current - previous) / previous


def compute_cagr(periods: Sequence[FinancialPeriod]) -> float:
    """Compound annual revenue growth between the first and latest period."""
    if len(periods) < 2:
        return 0.0
    first, last = periods[0].revenue, periods[-1].revenue
    # Fractional powers of negative bases are undefined.
    if first <= 0 or last <= 0:
        return 0.0
    try:
        return _finite((last / first) ** (1 / (len(periods) - 1)) - 1)
    except OverflowError:
        return 0.0


def compute_net_margin(periods: Sequence[FinancialPeriod]) -> float:
    """Mean net income over revenue, skipping zero-revenue periods."""
    margins = [p.net_income / p.revenue for p in periods if p.revenue != 0]
    if not margins:
        return 0.0
    return _finite(sum(margins) / len(margins))


def compute_burn_multiple(periods: Sequence[FinancialPeriod]) -> float:
    """Cumulative cash burn per unit of revenue added over the window."""
    total_burn = sum(max(0.0, -p.free_cash_flow) for p in periods)
    # Flat or shrinking revenue would otherwise blow the ratio up.
    new_revenue = max(1.0, periods[-1].revenue - periods[0].revenue)
    return _clamp(_finite(total_burn / new_revenue), 0.0, BURN_MULTIPLE_CAP)


def compute_leverage_ratio(periods: Sequence[FinancialPeriod]) -> float:
    """Latest liabilities over latest assets."""
    last = periods[-1]
    if last.assets <= 0:
        return 0.0
    return _clamp(_finite(last.liabilities / last.assets), 0.0, LEVERAGE_CAP)


def compute_liquidity_ratio(periods: Sequence[FinancialPeriod]) -> float:
    """Months of runway: latest cash over average monthly operating expense."""
    avg_opex = sum(p.operating_expenses for p in periods) / len(periods)
    monthly_burn = max(1.0, avg_opex / 12)
    return _clamp(_finite(periods[-1].cash / monthly_burn), 0.0, LIQUIDITY_CAP_MONTHS)


def compute_growth_velocity(periods: Sequence[FinancialPeriod]) -> float:
    """Mean period-over-period revenue growth; 0 when any prior revenue is 0."""
    if len(periods) < 2:
        return 0.0
    growths: List[float] = []
    for prev, curr in zip(periods, periods[1:]):
        g = _compute_growth(curr.revenue, prev.revenue)
        if g is None:
            return 0.0
        growths.append(g)
    return _finite(sum(growths) / len(growths))


def compute_metrics(periods: Sequence[FinancialPeriod]) -> TrailingMetrics:
    """
    Derive trailing metrics from a non-empty, oldest-first period sequence.

    Every value is finite: divisions by zero and non-finite intermediates
    resolve to 0 rather than raising.
    """
    return TrailingMetrics(
        cagr=compute_cagr(periods),
        net_margin=compute_net_margin(periods),
        burn_multiple=compute_burn_multiple(periods),
        leverage_ratio=compute_leverage_ratio(periods),
        liquidity_ratio=compute_liquidity_ratio(periods),
        growth_velocity=compute_growth_velocity(periods),
    )
