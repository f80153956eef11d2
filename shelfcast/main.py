from contextlib import asynccontextmanager
import logging

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelfcast.api import estimation
from shelfcast.core.config import settings
from shelfcast.core.logging import configure_logging
from shelfcast.services.date_estimator import DateEstimator
from shelfcast.services.oracle_client import OracleClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()

    # Startup: one pooled HTTP client for all oracle calls
    async with httpx.AsyncClient(timeout=settings.oracle_timeout_seconds) as http_client:
        app.state.estimator = DateEstimator(oracle=OracleClient(http_client=http_client))
        if settings.oracle_configured:
            logger.info(f"Oracle enabled at {settings.oracle_url}")
        else:
            logger.info("No oracle configured, estimates will be heuristic")

        yield  # Application runs here

    # Shutdown: client closed by the context manager
    app.state.estimator = None
    logger.info("Estimator shut down")


app = FastAPI(
    title="Shelfcast API",
    description="Expiration and restock date estimation for purchased items",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(estimation.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "oracle_configured": settings.oracle_configured}
