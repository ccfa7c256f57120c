import logging
import os
from typing import Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .engine import run_analysis
from .models import ASSUMPTION_BOUNDS
from .sample_data import sample_payload
from .sanitize import normalize_assumptions, normalize_periods

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost,http://127.0.0.1"

EMPTY_INPUT_MESSAGE = "No financial periods supplied."
INVALID_BODY_MESSAGE = "Request body must be a JSON object."
FAILURE_MESSAGE = "Unable to evaluate financials."


def _allowed_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", DEFAULT_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(title="aurora analyst API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class Metrics(BaseModel):
    cagr: float
    netMargin: float
    burnMultiple: float
    leverageRatio: float
    liquidityRatio: float
    growthVelocity: float


class ScenarioYear(BaseModel):
    year: str
    revenue: float
    netIncome: float
    freeCashFlow: float


class HealthScores(BaseModel):
    overall: float
    growth: float
    profitability: float
    liquidity: float
    efficiency: float


class RecommendationSection(BaseModel):
    title: str
    highlight: str
    bullets: List[str]


class Analysis(BaseModel):
    metrics: Metrics
    scenario: List[ScenarioYear]
    healthScores: HealthScores
    riskSignals: List[str]
    narrative: str
    recommendations: List[RecommendationSection]


class AnalyzeResponse(BaseModel):
    data: Analysis


class SamplePeriod(BaseModel):
    label: str
    revenue: float
    cogs: float
    operatingExpenses: float
    netIncome: float
    assets: float
    liabilities: float
    cash: float
    freeCashFlow: float


class SampleResponse(BaseModel):
    periods: List[SamplePeriod]
    assumptions: Dict[str, float]


@app.exception_handler(StarletteHTTPException)
async def error_envelope(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": message} to match the analyze contract."""
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.get("/health", tags=["health"])
def health() -> dict:
    """Lightweight readiness probe."""
    return {"status": "ok"}


@app.get("/sample", response_model=SampleResponse, tags=["analysis"])
def sample() -> SampleResponse:
    """Serve the demo dataset the UI loads on first render."""
    return sample_payload()  # type: ignore[return-value]


@app.get("/assumptions/bounds", tags=["analysis"])
def assumption_bounds() -> Dict[str, Dict[str, float]]:
    """Slider limits for the four scenario levers."""
    return ASSUMPTION_BOUNDS


@app.post("/analyze", response_model=AnalyzeResponse, tags=["analysis"])
async def analyze(request: Request) -> AnalyzeResponse:
    """Sanitize {periods, assumptions} and run the analysis engine."""
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail=INVALID_BODY_MESSAGE)
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail=INVALID_BODY_MESSAGE)

    periods = normalize_periods(body.get("periods"))
    assumptions = normalize_assumptions(body.get("assumptions"))
    if not periods:
        raise HTTPException(status_code=400, detail=EMPTY_INPUT_MESSAGE)

    try:
        result = run_analysis(periods, assumptions)
    except Exception:
        logger.exception("Analysis failed for %d periods", len(periods))
        raise HTTPException(status_code=500, detail=FAILURE_MESSAGE)
    logger.info(
        "Analyzed %d periods: overall=%.0f signals=%d",
        len(periods),
        result.health_scores.overall,
        len(result.risk_signals),
    )
    return {"data": result.to_dict()}  # type: ignore[return-value]
