"""
Device Simulator
================

Talks to the gateway the way the firmware does, so the backend can be
exercised without a module on the bench.

    pair_device()  - what setup() does: POST /api/register
    send_reading() - sendSensorData(): POST /api/data type=sensor_data
    send_alert()   - sendAlertEvent(): POST /api/data type=alert
    ping()         - the harness' ANY /ping

Run a quick smoke test against a running pairing API:

    python -m gateway.simulator http://localhost:3001 --device ESP32-TEST
"""

import argparse
import asyncio
import logging
from typing import Any, Optional

import httpx

from gateway.logging_setup import configure_logging

logger = logging.getLogger(__name__)


async def pair_device(
    client: httpx.AsyncClient,
    device_id: str,
    device_type: str = "ESP32",
    version: str = "1.0.0",
) -> str:
    """
    Register a device and return its shop id.

    Raises:
        httpx.HTTPStatusError: If the backend refuses the registration
    """
    response = await client.post(
        "/api/register",
        json={"deviceId": device_id, "deviceType": device_type, "version": version},
    )
    response.raise_for_status()
    shop_id = response.json()["shopId"]
    logger.info(f"[SIM] {device_id} paired as {shop_id} (HTTP {response.status_code})")
    return shop_id


async def send_reading(
    client: httpx.AsyncClient,
    device_id: str,
    shop_id: str,
    data: dict[str, Any],
) -> httpx.Response:
    """POST one sensor reading. The response is returned as-is."""
    return await client.post(
        "/api/data",
        json={"deviceId": device_id, "shopId": shop_id, "type": "sensor_data", "data": data},
    )


async def send_alert(
    client: httpx.AsyncClient,
    device_id: str,
    shop_id: str,
    alert_type: str,
    message: Optional[str] = None,
) -> httpx.Response:
    """POST one alert event. The response is returned as-is."""
    return await client.post(
        "/api/data",
        json={
            "deviceId": device_id,
            "shopId": shop_id,
            "type": "alert",
            "alertType": alert_type,
            "message": message,
        },
    )


async def ping(client: httpx.AsyncClient) -> str:
    """Hit the harness' /ping and return the body text."""
    response = await client.get("/ping")
    response.raise_for_status()
    return response.text


async def smoke_test(base_url: str, device_id: str) -> None:
    """Pair, send one reading and one alert, and log each answer."""
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        shop_id = await pair_device(client, device_id)

        response = await send_reading(client, device_id, shop_id, {"smoke": 42, "temperature": 23.5})
        logger.info(f"[SIM] reading -> {response.status_code} {response.text}")

        response = await send_alert(client, device_id, shop_id, "SMOKE", "Smoke detected in simulator")
        logger.info(f"[SIM] alert -> {response.status_code} {response.text}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Simulate an ESP32 talking to the pairing API.")
    parser.add_argument("base_url", nargs="?", default="http://localhost:3001")
    parser.add_argument("--device", default="ESP32-SIM-001", help="Device id to register")
    args = parser.parse_args(argv)

    configure_logging()
    asyncio.run(smoke_test(args.base_url, args.device))


if __name__ == "__main__":
    main()
