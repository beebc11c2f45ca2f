"""
PaletteGrab Backend
FastAPI application exposing palette extraction and color formatting.
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from palettegrab import __version__
from palettegrab.api.v1 import router as v1_router
from palettegrab.config import config
from palettegrab.schemas import HealthResponse
from palettegrab.utils.logging import get_logger
from palettegrab.utils.metrics import get_metrics

logger = get_logger()

app = FastAPI(
    title="PaletteGrab Backend",
    description="Color palette extraction with multi-notation color output",
    version=__version__
)

allowed_origins = [origin.strip() for origin in config.ALLOWED_ORIGINS.split(",") if origin.strip()]
if allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"]
    )

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=__version__, service="palettegrab")


@app.get("/metrics")
def metrics_summary():
    """Get in-process extraction metrics."""
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return get_metrics().get_summary()


logger.info("PaletteGrab backend initialized", extra={"version": __version__})
