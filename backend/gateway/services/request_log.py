"""
Request Log
===========

The last N requests seen by the SIM900 test harness, newest first.

A deque with a max length is all this needs: appendleft() on a full deque
drops the entry at the right end, so the oldest request falls out as soon as
a new one comes in.
"""

import time
from collections import deque
from datetime import datetime, timezone
from typing import Deque

from gateway.models import RequestLogEntry, RequestMetadata


class RequestLog:
    """Bounded, newest-first log of raw requests."""

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._entries: Deque[RequestLogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, metadata: RequestMetadata) -> RequestLogEntry:
        """Log a request at the head, evicting the oldest one when full."""
        now = time.time()
        entry = RequestLogEntry(
            id=int(now * 1000),
            timestamp=datetime.fromtimestamp(now, tz=timezone.utc),
            **metadata.model_dump(),
        )
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[RequestLogEntry]:
        """Snapshot of the log, most recent first."""
        return list(self._entries)
