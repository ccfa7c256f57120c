import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import unittest

from analyst.metrics import compute_metrics
from analyst.models import FinancialPeriod, TrailingMetrics
from analyst.risk import (
    BURN_SIGNAL,
    CASH_TRAJECTORY_SIGNAL,
    LEVERAGE_SIGNAL,
    NEGATIVE_MARGIN_SIGNAL,
    RUNWAY_SIGNAL,
    detect_risks,
)

HEALTHY = TrailingMetrics(net_margin=0.1, leverage_ratio=0.3, liquidity_ratio=12, burn_multiple=1.0)


class DetectRisksTests(unittest.TestCase):
    def test_all_rules_fire_in_order(self) -> None:
        metrics = TrailingMetrics(net_margin=-0.1, leverage_ratio=0.8, liquidity_ratio=2, burn_multiple=3)
        periods = [FinancialPeriod(free_cash_flow=-10), FinancialPeriod(free_cash_flow=-20)]
        self.assertEqual(
            detect_risks(metrics, periods),
            [NEGATIVE_MARGIN_SIGNAL, LEVERAGE_SIGNAL, RUNWAY_SIGNAL, BURN_SIGNAL, CASH_TRAJECTORY_SIGNAL],
        )

    def test_healthy_metrics_emit_nothing(self) -> None:
        periods = [FinancialPeriod(free_cash_flow=5), FinancialPeriod(free_cash_flow=8)]
        self.assertEqual(detect_risks(HEALTHY, periods), [])

    def test_thresholds_are_strict(self) -> None:
        metrics = TrailingMetrics(net_margin=0.0, leverage_ratio=0.7, liquidity_ratio=3, burn_multiple=2)
        self.assertEqual(detect_risks(metrics, [FinancialPeriod()]), [])

    def test_improving_negative_cash_flow_is_not_flagged(self) -> None:
        periods = [FinancialPeriod(free_cash_flow=-10), FinancialPeriod(free_cash_flow=-5)]
        self.assertEqual(detect_risks(HEALTHY, periods), [])

    def test_single_period_skips_trajectory_rule(self) -> None:
        self.assertEqual(detect_risks(HEALTHY, [FinancialPeriod(free_cash_flow=-10)]), [])

    def test_threshold_override(self) -> None:
        metrics = TrailingMetrics(net_margin=0.1, leverage_ratio=0.8, liquidity_ratio=12, burn_multiple=1.0)
        self.assertEqual(detect_risks(metrics, [FinancialPeriod()]), [LEVERAGE_SIGNAL])
        self.assertEqual(detect_risks(metrics, [FinancialPeriod()], {"leverage_ceiling": 0.9}), [])

    def test_healthy_company_from_periods(self) -> None:
        periods = [
            FinancialPeriod(
                label="FY23",
                revenue=100,
                net_income=5,
                operating_expenses=120,
                assets=900,
                liabilities=400,
                cash=80,
                free_cash_flow=-100,
            ),
            FinancialPeriod(
                label="FY24",
                revenue=200,
                net_income=20,
                operating_expenses=120,
                assets=1000,
                liabilities=300,
                cash=120,
                free_cash_flow=0,
            ),
        ]
        metrics = compute_metrics(periods)
        self.assertAlmostEqual(metrics.leverage_ratio, 0.3)
        self.assertAlmostEqual(metrics.liquidity_ratio, 12.0)
        self.assertAlmostEqual(metrics.burn_multiple, 1.0)
        self.assertEqual(detect_risks(metrics, periods), [])


if __name__ == "__main__":
    unittest.main()
