"""Exception handlers shared by both apps."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gateway.exceptions import GatewayError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Render gateway errors as `{"error": <message>}` with their status code."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        logger.info(f"[HTTP] {request.method} {request.url.path} -> {exc.status_code} {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
        )
