"""
Models Package
==============

Import from here instead of the individual files.

Example:
    from gateway.models import RegisterRequest, DeviceRecord
"""

from .device import (
    # What devices send us
    RegisterRequest,
    DataSubmission,

    # What we keep in memory
    DeviceRecord,
    TelemetrySample,
    RegistrationResult,
    AckResult,

    # What we send back
    RegisterResponse,
    DeviceSummary,
)
from .request_log import RequestMetadata, RequestLogEntry

__all__ = [
    "RegisterRequest",
    "DataSubmission",
    "DeviceRecord",
    "TelemetrySample",
    "RegistrationResult",
    "AckResult",
    "RegisterResponse",
    "DeviceSummary",
    "RequestMetadata",
    "RequestLogEntry",
]
