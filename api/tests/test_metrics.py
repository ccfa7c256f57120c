import sys
from pathlib import Path

# Make the analyst package importable when running tests from repo root.
sys.path.append(str(Path(__file__).resolve().parents[1]))

import math
import unittest

from analyst.metrics import (
    BURN_MULTIPLE_CAP,
    LEVERAGE_CAP,
    LIQUIDITY_CAP_MONTHS,
    _compute_growth,
    _finite,
    _safe_div,
    compute_burn_multiple,
    compute_cagr,
    compute_growth_velocity,
    compute_leverage_ratio,
    compute_liquidity_ratio,
    compute_metrics,
    compute_net_margin,
)
from analyst.models import FinancialPeriod


def period(**kwargs) -> FinancialPeriod:
    return FinancialPeriod(**kwargs)


class HelperFunctionTests(unittest.TestCase):
    def test_safe_div_zero_denominator(self) -> None:
        self.assertIsNone(_safe_div(10.0, 0))
        self.assertIsNone(_safe_div(None, 5.0))
        self.assertAlmostEqual(_safe_div(10.0, 4.0), 2.5)

    def test_finite_collapses_non_finite(self) -> None:
        self.assertEqual(_finite(float("nan")), 0.0)
        self.assertEqual(_finite(float("inf")), 0.0)
        self.assertEqual(_finite(None), 0.0)
        self.assertEqual(_finite(-2.5), -2.5)

    def test_compute_growth(self) -> None:
        self.assertAlmostEqual(_compute_growth(120.0, 100.0), 0.2)
        self.assertIsNone(_compute_growth(100.0, 0))


class CagrTests(unittest.TestCase):
    def test_two_period_example(self) -> None:
        periods = [period(revenue=100, net_income=10), period(revenue=150, net_income=20)]
        self.assertAlmostEqual(compute_cagr(periods), 0.5)

    def test_three_periods_uses_n_minus_one_exponent(self) -> None:
        periods = [period(revenue=100), period(revenue=5), period(revenue=121)]
        self.assertAlmostEqual(compute_cagr(periods), 0.1)

    def test_single_period_is_zero(self) -> None:
        self.assertEqual(compute_cagr([period(revenue=100)]), 0.0)

    def test_non_positive_bases_are_zero(self) -> None:
        self.assertEqual(compute_cagr([period(revenue=0), period(revenue=100)]), 0.0)
        self.assertEqual(compute_cagr([period(revenue=-50), period(revenue=100)]), 0.0)
        self.assertEqual(compute_cagr([period(revenue=100), period(revenue=-10)]), 0.0)

    def test_overflowing_ratio_collapses_to_zero(self) -> None:
        periods = [period(revenue=1e-300), period(revenue=1e300)]
        self.assertEqual(compute_cagr(periods), 0.0)


class NetMarginTests(unittest.TestCase):
    def test_average_of_period_margins(self) -> None:
        periods = [period(revenue=100, net_income=10), period(revenue=150, net_income=20)]
        self.assertAlmostEqual(compute_net_margin(periods), (10 / 100 + 20 / 150) / 2)

    def test_zero_revenue_periods_are_excluded(self) -> None:
        periods = [period(revenue=0, net_income=-50), period(revenue=200, net_income=20)]
        self.assertAlmostEqual(compute_net_margin(periods), 0.1)

    def test_no_qualifying_period(self) -> None:
        self.assertEqual(compute_net_margin([period(revenue=0, net_income=10)]), 0.0)


class BurnMultipleTests(unittest.TestCase):
    def test_burn_over_new_revenue(self) -> None:
        periods = [
            period(revenue=100, free_cash_flow=-50),
            period(revenue=300, free_cash_flow=-150),
        ]
        self.assertAlmostEqual(compute_burn_multiple(periods), 1.0)

    def test_positive_cash_flow_does_not_offset_burn(self) -> None:
        periods = [
            period(revenue=100, free_cash_flow=-100),
            period(revenue=300, free_cash_flow=500),
        ]
        self.assertAlmostEqual(compute_burn_multiple(periods), 0.5)

    def test_flat_revenue_uses_floor_of_one(self) -> None:
        periods = [period(revenue=100, free_cash_flow=-4), period(revenue=100, free_cash_flow=-6)]
        self.assertAlmostEqual(compute_burn_multiple(periods), 10.0)

    def test_capped(self) -> None:
        periods = [period(revenue=100, free_cash_flow=-1000), period(revenue=90)]
        self.assertEqual(compute_burn_multiple(periods), BURN_MULTIPLE_CAP)


class LeverageTests(unittest.TestCase):
    def test_uses_latest_period(self) -> None:
        periods = [
            period(assets=100, liabilities=90),
            period(assets=1000, liabilities=300),
        ]
        self.assertAlmostEqual(compute_leverage_ratio(periods), 0.3)

    def test_zero_assets(self) -> None:
        self.assertEqual(compute_leverage_ratio([period(assets=0, liabilities=10)]), 0.0)

    def test_capped(self) -> None:
        periods = [period(assets=1000, liabilities=100_000)]
        self.assertEqual(compute_leverage_ratio(periods), LEVERAGE_CAP)


class LiquidityTests(unittest.TestCase):
    def test_months_of_runway(self) -> None:
        periods = [period(operating_expenses=120, cash=0), period(operating_expenses=120, cash=120)]
        self.assertAlmostEqual(compute_liquidity_ratio(periods), 12.0)

    def test_monthly_expense_floor(self) -> None:
        self.assertAlmostEqual(compute_liquidity_ratio([period(operating_expenses=0, cash=5)]), 5.0)

    def test_clamped_to_range(self) -> None:
        self.assertEqual(
            compute_liquidity_ratio([period(operating_expenses=12, cash=1_000_000)]),
            LIQUIDITY_CAP_MONTHS,
        )
        self.assertEqual(compute_liquidity_ratio([period(operating_expenses=12, cash=-50)]), 0.0)


class GrowthVelocityTests(unittest.TestCase):
    def test_mean_period_growth(self) -> None:
        periods = [period(revenue=100), period(revenue=110), period(revenue=121)]
        self.assertAlmostEqual(compute_growth_velocity(periods), 0.1)

    def test_zero_denominator_yields_zero(self) -> None:
        periods = [period(revenue=0), period(revenue=100), period(revenue=200)]
        self.assertEqual(compute_growth_velocity(periods), 0.0)

    def test_single_period(self) -> None:
        self.assertEqual(compute_growth_velocity([period(revenue=100)]), 0.0)


class ComputeMetricsTests(unittest.TestCase):
    def test_all_zero_revenue_is_finite(self) -> None:
        periods = [period(label="A"), period(label="B"), period(label="C", free_cash_flow=-10)]
        metrics = compute_metrics(periods)
        self.assertEqual(metrics.cagr, 0.0)
        self.assertEqual(metrics.net_margin, 0.0)
        for value in (
            metrics.burn_multiple,
            metrics.leverage_ratio,
            metrics.liquidity_ratio,
            metrics.growth_velocity,
        ):
            self.assertTrue(math.isfinite(value))

    def test_example_pair(self) -> None:
        periods = [period(revenue=100, net_income=10), period(revenue=150, net_income=20)]
        metrics = compute_metrics(periods)
        self.assertAlmostEqual(metrics.cagr, 0.5)
        self.assertAlmostEqual(metrics.net_margin, 0.11666, places=4)
        self.assertAlmostEqual(metrics.growth_velocity, 0.5)


if __name__ == "__main__":
    unittest.main()
