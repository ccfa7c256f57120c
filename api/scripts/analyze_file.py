import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

sys.path.append(str(Path(__file__).resolve().parents[1]))

from analyst.engine import run_analysis
from analyst.sample_data import sample_payload
from analyst.sanitize import normalize_assumptions, normalize_periods

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the financial analysis engine over a JSON payload.")
    parser.add_argument("path", nargs="?", help="JSON file holding {periods, assumptions}.")
    parser.add_argument("--sample", action="store_true", help="Analyze the bundled demo dataset.")
    parser.add_argument("--revenue-growth", type=float, help="Override the revenueGrowth lever (pp).")
    parser.add_argument("--margin-shift", type=float, help="Override the marginShift lever (pp).")
    parser.add_argument("--efficiency-gain", type=float, help="Override the efficiencyGain lever (pp).")
    parser.add_argument("--cash-conversion", type=float, help="Override the cashConversion lever (pp).")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent for output.")
    return parser.parse_args(argv)


def _lever_overrides(args: argparse.Namespace) -> Dict[str, Optional[float]]:
    """Map CLI lever flags onto payload assumption keys."""
    return {
        "revenueGrowth": args.revenue_growth,
        "marginShift": args.margin_shift,
        "efficiencyGain": args.efficiency_gain,
        "cashConversion": args.cash_conversion,
    }


def _load_payload(args: argparse.Namespace) -> Dict[str, Any]:
    if args.sample or not args.path:
        return sample_payload()
    with open(args.path) as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = _parse_args(argv)
    try:
        payload = _load_payload(args)
    except OSError as exc:
        logger.error("Unable to read payload file %s: %s", args.path, exc)
        return 1
    except ValueError as exc:
        logger.error("Payload file %s is not valid JSON: %s", args.path, exc)
        return 1
    if not isinstance(payload, dict):
        logger.error("Payload must be a JSON object with periods and assumptions.")
        return 1

    raw = payload.get("assumptions")
    assumptions_raw = dict(raw) if isinstance(raw, dict) else {}
    for wire_key, value in _lever_overrides(args).items():
        if value is not None:
            assumptions_raw[wire_key] = value

    periods = normalize_periods(payload.get("periods"))
    if not periods:
        logger.error("No financial periods supplied.")
        return 1
    result = run_analysis(periods, normalize_assumptions(assumptions_raw))
    print(json.dumps({"data": result.to_dict()}, indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
