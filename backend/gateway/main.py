"""
Device Gateway - Pairing API
============================
FastAPI application that GSM/GPRS modules (SIM900) and ESP32 boards talk to.

ARCHITECTURE:
    [ESP32 / SIM900] --HTTP POST JSON--> [This Backend]
                                               |
                                               v
                                  [In-memory device registry]

    Devices call /api/register once from setup() and get a shop id back.
    After that they POST readings and alerts to /api/data.
    Nothing is persisted: a restart forgets every device, and modules
    re-register on their next boot.

HOW TO RUN:
    pip install -e .
    cp .env.example .env   # optional

    # Run the server (binds 0.0.0.0:3001 by default)
    gateway-pairing
    # or
    uvicorn gateway.main:app --host 0.0.0.0 --port 3001

API DOCUMENTATION:
    - Swagger UI: http://localhost:3001/docs
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway import __version__
from gateway.config import Config
from gateway.errors import register_exception_handlers
from gateway.logging_setup import configure_logging
from gateway.routers import devices_router
from gateway.services import DeviceRegistry

configure_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    STARTUP: log where devices should point.
    SHUTDOWN: log how many devices are dropped with the process.
    """
    logger.info("=" * 60)
    logger.info("DEVICE GATEWAY - Pairing API starting")
    logger.info("=" * 60)
    logger.info(f"Device Registration endpoint: http://[YOUR-SERVER-IP]:{Config.PAIRING_PORT}/api/register")
    logger.info(f"Data Submission endpoint: http://[YOUR-SERVER-IP]:{Config.PAIRING_PORT}/api/data")
    logger.info(f"Body limit: {app.state.body_limit} bytes")

    yield  # Application runs here

    logger.info(f"Shutting down, forgetting {len(app.state.registry)} device(s)")


# =============================================================================
# CREATE FASTAPI APPLICATION
# =============================================================================

def create_app(
    registry: Optional[DeviceRegistry] = None,
    body_limit: int = Config.BODY_LIMIT_BYTES,
) -> FastAPI:
    """
    Build the pairing API.

    Args:
        registry: Device store to serve (a new one from Config when omitted)
        body_limit: Max request body size in bytes
    """
    app = FastAPI(
        title="Device Gateway - Pairing API",
        description="Registration and data/alert ingestion for SIM900 and ESP32 field devices.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.registry = registry if registry is not None else DeviceRegistry(
        shop_id_prefix=Config.SHOP_ID_PREFIX,
        shop_id_range=Config.SHOP_ID_RANGE,
        seed=Config.SHOP_ID_SEED,
        max_samples_per_device=Config.MAX_SAMPLES_PER_DEVICE,
    )
    app.state.body_limit = body_limit

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(devices_router)

    @app.get("/health", summary="Health Check")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "devices": len(app.state.registry),
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the pairing API on all interfaces."""
    uvicorn.run(app, host=Config.HOST, port=Config.PAIRING_PORT)


if __name__ == "__main__":
    run()
