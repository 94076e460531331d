"""
Device Pairing API Router
=========================

The endpoints the ESP32 / SIM900 firmware talks to.

ALL ENDPOINTS:
-------------
POST /api/register          - Check in; get (or confirm) a shop id
POST /api/data              - Sensor readings (type=sensor_data) and alerts (type=alert)
GET  /api/devices           - List paired devices (debugging)
GET  /api/devices/{id}      - One device with its stored readings (debugging)

Errors come back as {"error": "..."} with 400 (missing field),
404 (unknown device) or 413 (body over the limit).
"""

import logging
from typing import Type, TypeVar

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from gateway.exceptions import NotFoundError, ValidationError
from gateway.models import DataSubmission, DeviceSummary, RegisterRequest, RegisterResponse
from gateway.services import DeviceRegistry
from gateway.utils import read_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["devices"])

ModelT = TypeVar("ModelT", bound=BaseModel)


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_device_registry(request: Request) -> DeviceRegistry:
    """FastAPI dependency: the registry owned by the running app."""
    return request.app.state.registry


async def _parse_body(request: Request, model: Type[ModelT]) -> ModelT:
    fields = await read_fields(request, request.app.state.body_limit)
    try:
        return model.model_validate(fields)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"Invalid field {field}: {error['msg']}")


# =============================================================================
# DEVICE ENDPOINTS
# =============================================================================

@router.post(
    "/register",
    summary="Register Device",
    description="Called once from the firmware's setup(). Returns 201 for a new device, 200 for a repeat check-in.",
)
async def register_device(
    request: Request,
    response: Response,
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """
    Pair a device with the backend.

    **Body**
    - deviceId (required)
    - deviceType, version (optional, informational)
    """
    body = await _parse_body(request, RegisterRequest)
    result = registry.register(body.device_id, body.device_type, body.version)

    response.status_code = 201 if result.created else 200
    return RegisterResponse(message=result.message, shop_id=result.shop_id).model_dump(by_alias=True)


@router.post(
    "/data",
    summary="Submit Data or Alert",
    description="Sensor readings (type=sensor_data) are stored; alerts (type=alert) are logged.",
)
async def submit_data(
    request: Request,
    registry: DeviceRegistry = Depends(get_device_registry),
):
    """
    Accept a reading or an alert from a paired device.

    **Body**
    - deviceId, shopId (required)
    - type: "sensor_data" or "alert" (other values are accepted and ignored)
    - data: readings, e.g. {"smoke": 120, "temperature": 24.5}
    - alertType, message: alert details
    """
    body = await _parse_body(request, DataSubmission)
    ack = registry.submit(
        body.device_id,
        body.shop_id,
        type=body.type,
        data=body.data,
        alert_type=body.alert_type,
        message=body.message,
    )
    return ack.model_dump()


@router.get("/devices", summary="List Devices")
async def list_devices(registry: DeviceRegistry = Depends(get_device_registry)):
    """All paired devices with their sample counts."""
    return [
        DeviceSummary.from_record(record).model_dump(by_alias=True, mode="json")
        for record in registry.list_devices()
    ]


@router.get("/devices/{device_id}", summary="Get Device")
async def get_device(device_id: str, registry: DeviceRegistry = Depends(get_device_registry)):
    """One device including every stored reading, oldest first."""
    record = registry.get_device(device_id)
    if record is None:
        raise NotFoundError("Device not recognized. Please re-register.")

    summary = DeviceSummary.from_record(record).model_dump(by_alias=True, mode="json")
    summary["dataHistory"] = [sample.as_dict() for sample in record.data_history]
    return summary
