"""
Device Registry
===============

Keeps track of every device that has paired with the backend.

WHAT IT DOES:
------------
1. Registers devices on first contact and hands out a shop id
2. Answers repeat check-ins with the shop id the device already has
3. Accepts sensor readings (stored per device) and alerts (logged only)

Everything lives in memory. A restart forgets all devices and the modules
simply register again on their next boot.

SHOP IDS:
--------
Shop ids are "SHOP-" plus a number drawn from 0..999. Two devices can end up
with the same shop id; nothing checks for that.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Any, Optional

from gateway.exceptions import NotFoundError, ValidationError
from gateway.models import AckResult, DeviceRecord, RegistrationResult, TelemetrySample
from gateway.utils.validation import is_blank

logger = logging.getLogger(__name__)


SENSOR_DATA = "sensor_data"
ALERT = "alert"


class DeviceRegistry:
    """
    In-memory store of paired devices, keyed by device id.

    One instance is created per application and shared by all requests.
    None of the methods await, so a call is never interleaved with another
    request on the event loop.
    """

    def __init__(
        self,
        shop_id_prefix: str = "SHOP-",
        shop_id_range: int = 1000,
        seed: Optional[int] = None,
        max_samples_per_device: Optional[int] = None,
    ):
        """
        Args:
            shop_id_prefix: Text put in front of every generated shop number
            shop_id_range: Shop numbers are drawn from 0..shop_id_range-1
            seed: Seed for the shop number generator (None = OS entropy)
            max_samples_per_device: Keep at most this many samples per device.
                None keeps everything.
        """
        self.shop_id_prefix = shop_id_prefix
        self.shop_id_range = shop_id_range
        self.max_samples_per_device = max_samples_per_device
        self._random = random.Random(seed)
        self._devices: dict[str, DeviceRecord] = {}

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device_id: str) -> bool:
        return device_id in self._devices

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def _new_shop_id(self) -> str:
        return f"{self.shop_id_prefix}{self._random.randrange(self.shop_id_range)}"

    def register(
        self,
        device_id: Optional[str],
        device_type: Any = None,
        version: Any = None,
    ) -> RegistrationResult:
        """
        Pair a device, or confirm an existing pairing.

        Args:
            device_id: Unique id reported by the firmware (required)
            device_type: e.g. "ESP32" or "SIM900" (informational)
            version: Firmware version (informational)

        Returns:
            RegistrationResult with `created=True` for a new device

        Raises:
            ValidationError: If device_id is missing or empty
        """
        if is_blank(device_id):
            raise ValidationError("Device ID is required for registration.")

        existing = self._devices.get(device_id)
        if existing is not None:
            logger.info(f"[Device] Device {device_id} checked in again.")
            return RegistrationResult(
                shop_id=existing.shop_id,
                created=False,
                message="Device already registered and paired.",
            )

        shop_id = self._new_shop_id()
        self._devices[device_id] = DeviceRecord(
            device_id=device_id,
            device_type=device_type,
            version=version,
            shop_id=shop_id,
            last_seen=datetime.now(timezone.utc),
        )

        logger.info(f"[Device] NEW device registered: {device_id} -> Shop ID: {shop_id}")

        return RegistrationResult(
            shop_id=shop_id,
            created=True,
            message="Registration successful. Device paired.",
        )

    # =========================================================================
    # DATA AND ALERTS
    # =========================================================================

    def submit(
        self,
        device_id: Optional[str],
        shop_id: Optional[str],
        type: Any = None,
        data: Any = None,
        alert_type: Any = None,
        message: Any = None,
    ) -> AckResult:
        """
        Accept a sensor reading or an alert from a paired device.

        - "sensor_data" with a data mapping: appended to the device history
        - "alert" with an alert type: logged as an alarm, not stored
        - anything else (including non-mapping data): only the last-seen time moves

        Raises:
            ValidationError: If device_id or shop_id is missing
            NotFoundError: If the device never registered
        """
        if is_blank(device_id) or is_blank(shop_id):
            raise ValidationError("Missing deviceId or shopId.")

        record = self._devices.get(device_id)
        if record is None:
            raise NotFoundError("Device not recognized. Please re-register.")

        now = datetime.now(timezone.utc)
        record.last_seen = now

        if type == SENSOR_DATA and isinstance(data, dict) and data:
            record.data_history.append(TelemetrySample(timestamp=now, values=data))
            if self.max_samples_per_device is not None:
                overflow = len(record.data_history) - self.max_samples_per_device
                if overflow > 0:
                    del record.data_history[:overflow]
            logger.info(
                f"[DATA] Received sensor data from {shop_id}: "
                f"Smoke={data.get('smoke')}, Temp={data.get('temperature')}"
            )

        elif type == ALERT and alert_type:
            logger.warning(
                "[ALARM] !!! ALARM RECEIVED !!! "
                f"DEVICE: {shop_id} ({device_id}) TYPE: {alert_type} MESSAGE: {message}",
                extra={
                    "shop_id": shop_id,
                    "device_id": device_id,
                    "alert_type": alert_type,
                    "alert_message": message,
                },
            )

        return AckResult()

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def get_device(self, device_id: str) -> Optional[DeviceRecord]:
        """Get one device by id, or None."""
        return self._devices.get(device_id)

    def list_devices(self) -> list[DeviceRecord]:
        """All devices in registration order."""
        return list(self._devices.values())
