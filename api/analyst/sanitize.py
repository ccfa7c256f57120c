import logging
import math
import re
from typing import Any, Dict, List

from .models import FinancialPeriod, ScenarioAssumptions

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "Period"

# Leading numeric prefix, e.g. "12.5k" -> 12.5, mirroring lenient form input.
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Wire name -> dataclass field; snake_case keys are accepted too.
PERIOD_FIELDS = {
    "revenue": "revenue",
    "cogs": "cogs",
    "operatingExpenses": "operating_expenses",
    "netIncome": "net_income",
    "assets": "assets",
    "liabilities": "liabilities",
    "cash": "cash",
    "freeCashFlow": "free_cash_flow",
}

ASSUMPTION_FIELDS = {
    "revenueGrowth": "revenue_growth",
    "marginShift": "margin_shift",
    "efficiencyGain": "efficiency_gain",
    "cashConversion": "cash_conversion",
}


def sanitize_number(value: Any) -> float:
    """Coerce a raw JSON value into a finite float, defaulting to 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if match:
            number = float(match.group(1))
            if math.isfinite(number):
                return number
    return 0.0


def _pick(row: Dict[str, Any], wire_key: str, field_name: str) -> Any:
    if wire_key in row:
        return row[wire_key]
    return row.get(field_name)


def normalize_periods(raw: Any) -> List[FinancialPeriod]:
    if not isinstance(raw, list):
        return []
    periods: List[FinancialPeriod] = []
    for idx, row in enumerate(raw):
        if not isinstance(row, dict):
            logger.debug("Dropping non-object period row at index %d", idx)
            continue
        label = row.get("label")
        values = {
            field_name: sanitize_number(_pick(row, wire_key, field_name))
            for wire_key, field_name in PERIOD_FIELDS.items()
        }
        periods.append(
            FinancialPeriod(
                label=label if isinstance(label, str) and label.strip() else DEFAULT_LABEL,
                **values,
            )
        )
    return periods


def normalize_assumptions(raw: Any) -> ScenarioAssumptions:
    if not isinstance(raw, dict):
        return ScenarioAssumptions()
    return ScenarioAssumptions(
        **{
            field_name: sanitize_number(_pick(raw, wire_key, field_name))
            for wire_key, field_name in ASSUMPTION_FIELDS.items()
        }
    )
