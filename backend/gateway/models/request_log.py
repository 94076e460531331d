"""
Request Log Models
==================
Raw request records kept by the SIM900 test harness.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class RequestMetadata(BaseModel):
    """
    What the harness knows about an inbound request before it is logged.

    Body is opaque: a decoded JSON/form mapping, raw text, or None.
    """
    method: str
    path: str
    ip: Optional[str] = None
    headers: dict[str, str] = Field(default_factory=dict)
    query: dict[str, Any] = Field(default_factory=dict)
    body: Any = None


class RequestLogEntry(RequestMetadata):
    """
    A logged request.

    `id` is the capture time in epoch milliseconds. Two requests in the same
    millisecond share an id.
    """
    id: int
    timestamp: datetime
