"""
Device Models
=============
Pydantic models for the pairing API.

- Request models: What the SIM900 / ESP32 firmware sends to the backend
- Response models: What the backend returns to the module
- Internal models: Device records and telemetry samples kept in memory

Field names on the wire are camelCase (deviceId, shopId, ...) because that is
what the firmware sends; Python attributes are snake_case.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Base for models exchanged with devices (camelCase aliases)."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# =============================================================================
# REQUEST MODELS - What the device sends to the backend
# =============================================================================

class RegisterRequest(_WireModel):
    """
    Body of POST /api/register.

    Sent once by the firmware's setup() to check in and get a shop id.
    `deviceId` is optional here so that a missing id maps to a 400 from the
    registry instead of a framework validation error.
    The other fields are taken as sent, whatever their shape.

    Example Request:
        POST /api/register
        {
            "deviceId": "ESP32-A1B2C3",
            "deviceType": "ESP32",
            "version": "1.0.3"
        }
    """
    device_id: Optional[str] = Field(None, alias="deviceId")
    device_type: Any = Field(None, alias="deviceType")
    version: Any = Field(None, alias="version")


class DataSubmission(_WireModel):
    """
    Body of POST /api/data.

    Used by the firmware's sendSensorData() and sendAlertEvent().

    Example Requests:
        {"deviceId": "ESP32-A1B2C3", "shopId": "SHOP-42", "type": "sensor_data",
         "data": {"smoke": 120, "temperature": 24.5}}

        {"deviceId": "ESP32-A1B2C3", "shopId": "SHOP-42", "type": "alert",
         "alertType": "SMOKE", "message": "Smoke level above threshold"}
    """
    device_id: Optional[str] = Field(None, alias="deviceId")
    shop_id: Optional[str] = Field(None, alias="shopId")
    type: Any = None
    data: Any = None
    alert_type: Any = Field(None, alias="alertType")
    message: Any = None


# =============================================================================
# INTERNAL MODELS - What we keep in memory
# =============================================================================

class TelemetrySample(BaseModel):
    """One sensor reading with the time it was received."""
    timestamp: datetime
    values: dict[str, Any] = Field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Flat form: the capture time followed by the reported values."""
        return {"timestamp": self.timestamp.isoformat(), **self.values}


class DeviceRecord(BaseModel):
    """
    A registered device.

    `shop_id` is assigned at first registration and never changes.
    `last_seen` moves on every data submission.
    """
    device_id: str
    device_type: Any = None
    version: Any = None
    shop_id: str
    last_seen: datetime
    data_history: list[TelemetrySample] = Field(default_factory=list)


class RegistrationResult(BaseModel):
    """Outcome of DeviceRegistry.register()."""
    shop_id: str
    created: bool
    message: str


class AckResult(BaseModel):
    """Outcome of DeviceRegistry.submit()."""
    status: str = "Data received"


# =============================================================================
# RESPONSE MODELS - What the backend returns
# =============================================================================

class RegisterResponse(_WireModel):
    """Response of POST /api/register (200 when known, 201 when new)."""
    message: str
    status: str = "paired"
    shop_id: str = Field(..., alias="shopId")


class DeviceSummary(_WireModel):
    """One row of GET /api/devices."""
    device_id: str = Field(..., alias="deviceId")
    device_type: Any = Field(None, alias="deviceType")
    version: Any = None
    shop_id: str = Field(..., alias="shopId")
    last_seen: datetime = Field(..., alias="lastSeen")
    sample_count: int = Field(..., alias="sampleCount")

    @classmethod
    def from_record(cls, record: DeviceRecord) -> "DeviceSummary":
        return cls(
            device_id=record.device_id,
            device_type=record.device_type,
            version=record.version,
            shop_id=record.shop_id,
            last_seen=record.last_seen,
            sample_count=len(record.data_history),
        )
