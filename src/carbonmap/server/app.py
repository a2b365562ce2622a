"""
Carbon calculation API.

Endpoints:
- POST /api/calculate-carbon: GeoJSON polygon -> biomass carbon + credit estimates
- POST /api/estimate: carbon tonnes -> credit estimates (no Earth Engine)
- GET /health, /api/health: liveness check
"""

import logging
import math
import traceback
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from carbonmap import __version__
from carbonmap.analysis import build_report, estimate_credits, suggest
from carbonmap.core.config import settings
from carbonmap.satellite import gee

logger = logging.getLogger(__name__)


# =============================================================================
# Request Models
# =============================================================================


class CalculateCarbonRequest(BaseModel):
    geometry: dict[str, Any] | None = Field(None, description="GeoJSON Polygon or MultiPolygon")


class EstimateRequest(BaseModel):
    total_tonnes: float | None = Field(None, description="Total stored carbon in tonnes C")


# =============================================================================
# Helpers
# =============================================================================


def _error_response(status_code: int, error: str, exc: Exception | None = None) -> JSONResponse:
    body: dict[str, Any] = {"error": error}
    if exc is not None:
        body["message"] = str(exc)
        if status_code >= 500:
            body["details"] = traceback.format_exc() if settings.debug else None
    return JSONResponse(status_code=status_code, content=body)


def _cors_origins() -> list[str]:
    return [origin.strip() for origin in settings.frontend_origin.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("carbonmap API %s starting", __version__)
    if settings.eager_gee_init:
        gee.ensure_initialized()
    yield
    logger.info("carbonmap API shutting down")


# =============================================================================
# Application
# =============================================================================


def create_app() -> FastAPI:
    app = FastAPI(
        title="carbonmap",
        description="Biomass carbon totals and carbon credit estimates for drawn regions",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"error": "invalid request", "message": str(exc.errors())},
        )

    @app.get("/health")
    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    # Sync handlers run in the threadpool; Earth Engine calls block.
    @app.post("/api/calculate-carbon")
    def calculate_carbon(payload: CalculateCarbonRequest):
        if not payload.geometry:
            return _error_response(400, "geometry required (GeoJSON geometry)")

        try:
            gee.ensure_initialized()
            totals = gee.calculate_carbon(payload.geometry)
        except gee.GeometryError as e:
            logger.warning("Rejected geometry: %s", e)
            return _error_response(400, "invalid geometry", e)
        except Exception as e:
            logger.exception("calculate-carbon failed")
            return _error_response(500, "calculation failed", e)

        logger.info("Calculated %.1f t carbon for %s", totals["total_tonnes"], payload.geometry.get("type"))
        return build_report(totals)

    @app.post("/api/estimate")
    def estimate(payload: EstimateRequest):
        total = payload.total_tonnes
        credits = estimate_credits(total)
        return {
            # NaN and infinities are not valid JSON
            "total_tonnes": total if total is not None and math.isfinite(total) else None,
            "credits": credits,
            "suggestions": suggest(credits) if credits else [],
        }

    return app


app = create_app()
