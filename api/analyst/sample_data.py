SAMPLE_PERIODS = [
    {
        "label": "FY21",
        "revenue": 1_250_000,
        "cogs": 520_000,
        "operatingExpenses": 690_000,
        "netIncome": -85_000,
        "assets": 1_900_000,
        "liabilities": 980_000,
        "cash": 640_000,
        "freeCashFlow": -140_000,
    },
    {
        "label": "FY22",
        "revenue": 1_620_000,
        "cogs": 640_000,
        "operatingExpenses": 780_000,
        "netIncome": 42_000,
        "assets": 2_250_000,
        "liabilities": 1_040_000,
        "cash": 710_000,
        "freeCashFlow": -35_000,
    },
    {
        "label": "FY23",
        "revenue": 2_080_000,
        "cogs": 790_000,
        "operatingExpenses": 880_000,
        "netIncome": 168_000,
        "assets": 2_720_000,
        "liabilities": 1_120_000,
        "cash": 860_000,
        "freeCashFlow": 96_000,
    },
    {
        "label": "FY24",
        "revenue": 2_610_000,
        "cogs": 960_000,
        "operatingExpenses": 1_010_000,
        "netIncome": 305_000,
        "assets": 3_280_000,
        "liabilities": 1_210_000,
        "cash": 1_090_000,
        "freeCashFlow": 212_000,
    },
]

SAMPLE_ASSUMPTIONS = {
    "revenueGrowth": 0,
    "marginShift": 0,
    "efficiencyGain": 0,
    "cashConversion": 0,
}


def sample_payload() -> dict:
    """Demo request body used by the UI and the CLI --sample flag."""
    return {
        "periods": [dict(period) for period in SAMPLE_PERIODS],
        "assumptions": dict(SAMPLE_ASSUMPTIONS),
    }
