"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Load environment variables
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from . import __version__
from .api.rest.routes import router as units_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logging.basicConfig(
        level=os.environ.get("UNITSTATS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("unit stats API %s starting", __version__)
    yield


app = FastAPI(
    title="Unit Stats API",
    description="Unit browser and stat preview API",
    version=__version__,
    lifespan=lifespan,
)

# Browser clients served from these origins may call the API
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "UNITSTATS_CORS_ORIGINS", "http://localhost:8000,http://127.0.0.1:8000"
    ).split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    units_url_overridden: bool


@app.get("/", tags=["meta"])
async def root():
    """API root with information and available endpoints."""
    return {
        "name": "Unit Stats API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "units": "GET /api/units",
            "unit": "GET /api/units/{unit_id}",
            "preview": "POST /api/units/{unit_id}/preview",
            "mods": "GET /api/mods",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health_check():
    """Check API health and configuration status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        units_url_overridden=bool(os.environ.get("UNITSTATS_UNITS_URL")),
    )


# Include REST routes
app.include_router(units_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=os.environ.get("UNITSTATS_HOST", "127.0.0.1"),
        port=int(os.environ.get("UNITSTATS_PORT", "8000")),
        log_level="info",
    )
