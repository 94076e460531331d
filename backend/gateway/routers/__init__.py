"""
Routers Package
===============

Routers direct incoming requests to the right place.

- devices_router: the pairing API (service A)
- harness_router: the SIM900 test harness (service B)
"""

from .devices import router as devices_router, get_device_registry
from .harness import router as harness_router, get_request_log

__all__ = [
    "devices_router",
    "harness_router",
    "get_device_registry",
    "get_request_log",
]
