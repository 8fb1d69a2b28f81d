"""Mining ROI Engine FastAPI application."""

from fastapi import FastAPI

from roi_engine.core.config import CURVE_CACHE_TTL_SECONDS
from roi_engine.core.cors import setup_cors
from roi_engine.core.errors import setup_error_handlers
from roi_engine.core.log import configure_logging
from roi_engine.models.results import HealthResponse
from roi_engine.api.v1.routes import router as v1_router
from roi_engine.providers.curves import CurveCache


configure_logging()

app = FastAPI(
    title="Mining ROI Engine",
    description="Mining and hosting investment analysis API",
    version="0.2.0",
)

# Setup CORS
setup_cors(app)
setup_error_handlers(app)

# Energy curves are cached per process, owned here rather than by the engine
app.state.curve_cache = CurveCache(ttl_seconds=CURVE_CACHE_TTL_SECONDS)

# Include v1 routes
app.include_router(v1_router, prefix="/v1", tags=["v1"])


@app.get("/health", response_model=HealthResponse, tags=["health"])
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", service="roi-engine")
