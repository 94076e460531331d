"""
Services Package
================

The in-memory stores behind the two apps.

- DeviceRegistry: paired devices and their readings (pairing API)
- RequestLog: the last N raw requests (test harness)
"""

from .device_registry import DeviceRegistry
from .request_log import RequestLog

__all__ = [
    "DeviceRegistry",
    "RequestLog",
]
