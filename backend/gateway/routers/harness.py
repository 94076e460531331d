"""
SIM900 Test Harness Router
==========================

Accepts anything a GSM module throws at it, remembers the last requests and
shows them on a dashboard. Used to debug AT+HTTPACTION setups before pointing
a module at the real pairing API.

ALL ENDPOINTS:
-------------
GET  /test          - Plain text "OK" for the simplest possible GET
GET  /data          - Echo query parameters
POST /data          - Echo body
ANY  /ping          - Plain text "PONG"
POST /register      - Echo (or make up) a deviceId
POST /alert         - Echo alertType
POST /sensor        - Acknowledge a reading
GET  /              - HTML dashboard of recent requests
GET  /api/requests  - Recent requests as JSON
ANY  /*             - Everything else: logged and acknowledged, never 404
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from gateway.models import RequestLogEntry, RequestMetadata
from gateway.services import RequestLog
from gateway.utils import is_blank, read_body

logger = logging.getLogger(__name__)

router = APIRouter(tags=["harness"])

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"]


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_request_log(request: Request) -> RequestLog:
    """FastAPI dependency: the request log owned by the running app."""
    return request.app.state.request_log


async def record_request(
    request: Request,
    log: RequestLog = Depends(get_request_log),
) -> RequestLogEntry:
    """Decode the body and put the request at the top of the log."""
    body = await read_body(request, request.app.state.body_limit)
    entry = log.record(
        RequestMetadata(
            method=request.method,
            path=request.url.path,
            ip=request.client.host if request.client else None,
            headers=dict(request.headers),
            query=dict(request.query_params),
            body=body,
        )
    )
    logger.info(f"[HARNESS] {entry.method} {entry.path} from {entry.ip} body={entry.body!r}")
    return entry


def _fields(entry: RequestLogEntry) -> dict:
    return entry.body if isinstance(entry.body, dict) else {}


# =============================================================================
# SIMPLE CHECKS
# =============================================================================

@router.get("/test", response_class=PlainTextResponse)
async def test_get(entry: RequestLogEntry = Depends(record_request)):
    """The first thing to try from a module: a bare GET."""
    return "OK - GET received from SIM900"


@router.api_route("/ping", methods=ALL_METHODS, response_class=PlainTextResponse)
async def ping(entry: RequestLogEntry = Depends(record_request)):
    """Liveness check for any method."""
    return "PONG"


# =============================================================================
# ECHO ENDPOINTS
# =============================================================================

@router.get("/data")
async def data_get(entry: RequestLogEntry = Depends(record_request)):
    """Echo query parameters, e.g. GET /data?temp=24&hum=60."""
    return {
        "success": True,
        "message": "GET data received",
        "received": entry.query,
        "timestamp": entry.timestamp.isoformat(),
    }


@router.post("/data")
async def data_post(entry: RequestLogEntry = Depends(record_request)):
    """Echo the decoded body."""
    return {
        "success": True,
        "message": "POST data received",
        "received": entry.body,
        "timestamp": entry.timestamp.isoformat(),
    }


@router.post("/register")
async def register(entry: RequestLogEntry = Depends(record_request)):
    """Echo the deviceId, or make one up from the request id when none was sent."""
    device_id = _fields(entry).get("deviceId")
    if is_blank(device_id):
        device_id = f"SIM900-{entry.id}"

    logger.info(f"[HARNESS] Device registered: {device_id}")
    return {
        "success": True,
        "message": "Device registered",
        "deviceId": device_id,
    }


@router.post("/alert")
async def alert(entry: RequestLogEntry = Depends(record_request)):
    alert_type = _fields(entry).get("alertType")
    logger.warning(f"[HARNESS] ALERT received: {alert_type}")
    return {
        "success": True,
        "message": "Alert received",
        "alertType": alert_type,
    }


@router.post("/sensor")
async def sensor(entry: RequestLogEntry = Depends(record_request)):
    return {
        "success": True,
        "message": "Sensor data received",
        "timestamp": entry.timestamp.isoformat(),
    }


# =============================================================================
# DASHBOARD
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request, log: RequestLog = Depends(get_request_log)):
    """Recent requests, newest first. Viewing the page is not itself logged."""
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "entries": log.entries(),
            "capacity": log.capacity,
        },
    )


@router.get("/api/requests")
async def list_requests(log: RequestLog = Depends(get_request_log)):
    """Recent requests as JSON, newest first. Not itself logged."""
    return [entry.model_dump(mode="json") for entry in log.entries()]


# =============================================================================
# CATCH-ALL (keep last)
# =============================================================================

@router.api_route("/{path:path}", methods=ALL_METHODS)
async def catch_all(entry: RequestLogEntry = Depends(record_request)):
    """Anything else a module sends is logged and acknowledged."""
    return {
        "success": True,
        "message": "Request received",
        "method": entry.method,
        "path": entry.path,
    }
