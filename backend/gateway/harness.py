"""
Device Gateway - SIM900 Test Harness
====================================
A throwaway server for bringing up a GSM module.

Every request is logged and answered with 200 so the module's
AT+HTTPACTION always gets something back. The last requests are shown
at http://<server>:3000/ so you can see exactly what the module sent
(method, path, headers, body).

HOW TO RUN:
    gateway-harness
    # or
    uvicorn gateway.harness:app --host 0.0.0.0 --port 3000
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
from gateway.routers import harness_router
from gateway.services import RequestLog

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 60)
    logger.info("DEVICE GATEWAY - SIM900 test harness starting")
    logger.info("=" * 60)
    logger.info(f"Dashboard: http://[YOUR-SERVER-IP]:{Config.HARNESS_PORT}/")
    logger.info(f"Quick check from the module: GET http://[YOUR-SERVER-IP]:{Config.HARNESS_PORT}/test")
    logger.info(f"Keeping the last {app.state.request_log.capacity} requests")

    yield

    logger.info("Harness stopped")


def create_app(
    request_log: Optional[RequestLog] = None,
    body_limit: int = Config.HARNESS_BODY_LIMIT_BYTES,
) -> FastAPI:
    """
    Build the test harness.

    Args:
        request_log: Log to record into (a new one with Config capacity when omitted)
        body_limit: Max request body size in bytes
    """
    app = FastAPI(
        title="Device Gateway - SIM900 Test Harness",
        version=__version__,
        lifespan=lifespan,
        # Keep /docs and /openapi.json out of the way of the catch-all
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.request_log = request_log if request_log is not None else RequestLog(
        capacity=Config.REQUEST_LOG_CAPACITY
    )
    app.state.body_limit = body_limit

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(harness_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the harness on all interfaces."""
    uvicorn.run(app, host=Config.HOST, port=Config.HARNESS_PORT)


if __name__ == "__main__":
    run()
