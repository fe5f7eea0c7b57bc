"""optrisk Web API - FastAPI application."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..analysis.strategy import analyze_strategy, pnl_curve
from ..config import get as cfg_get
from ..logutils import logger
from ..models import Strategy
from .models import (
    HealthResponse,
    PnLCurvePointResponse,
    PnLCurveRequest,
    PnLCurveResponse,
    StrategyAnalysisRequest,
    StrategyAnalysisResponse,
)

app = FastAPI(
    title="optrisk Web API",
    description="Options pricing and strategy risk analysis",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cfg_get("CORS_ORIGINS", []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def build_strategy(request: StrategyAnalysisRequest) -> Strategy:
    """Convert ``request`` into a :class:`Strategy` or raise HTTP 400."""
    try:
        return request.to_strategy(float(cfg_get("RISK_FREE_RATE", 0.05)))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# === API Endpoints ===

@app.get("/api/health", response_model=HealthResponse)
async def get_health():
    """Liveness probe."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/api/options/analyze", response_model=StrategyAnalysisResponse)
def analyze(request: StrategyAnalysisRequest):
    """Analyze an options strategy and return its risk metrics."""
    strategy = build_strategy(request)
    try:
        analysis = analyze_strategy(
            strategy,
            btc_price=request.usable_btc_price,
            target_prices=request.target_prices,
            second_order_greeks=bool(cfg_get("AGGREGATE_SECOND_ORDER_GREEKS", True)),
        )
    except Exception:
        logger.exception("Strategy analysis failed")
        raise HTTPException(status_code=500, detail="Failed to analyze strategy")
    return StrategyAnalysisResponse.model_validate(analysis.as_dict())


@app.post("/api/options/pnl-curve", response_model=PnLCurveResponse)
def get_pnl_curve(request: PnLCurveRequest):
    """Return chart points with expiry and current P&L."""
    strategy = build_strategy(request)
    num_points = request.num_points or int(cfg_get("PRICE_RANGE_POINTS", 50))
    try:
        points = pnl_curve(strategy, num_points)
    except Exception:
        logger.exception("P&L curve computation failed")
        raise HTTPException(status_code=500, detail="Failed to compute P&L curve")
    return PnLCurveResponse(
        points=[
            PnLCurvePointResponse(
                price=p.price, expiry_pnl=p.expiry_pnl, current_pnl=p.current_pnl
            )
            for p in points
        ]
    )


def run(host: str | None = None, port: int | None = None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        app,
        host=host or cfg_get("API_HOST", "127.0.0.1"),
        port=port or int(cfg_get("API_PORT", 8000)),
        log_config=None,
    )


if __name__ == "__main__":
    from ..logutils import setup_logging

    setup_logging()
    run()
