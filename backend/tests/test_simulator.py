"""
Tests for the device simulator, run against the ASGI apps in-process.
"""
import httpx
import pytest

from gateway.simulator import pair_device, ping, send_alert, send_reading


def _client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


class TestSimulatorAgainstPairingApi:
    @pytest.mark.asyncio
    async def test_full_device_session(self, pairing_app, registry):
        """Test pair, reading and alert as the firmware would send them."""
        async with _client(pairing_app) as client:
            shop_id = await pair_device(client, "ESP32-SIM")
            assert await pair_device(client, "ESP32-SIM") == shop_id

            reading = await send_reading(client, "ESP32-SIM", shop_id, {"smoke": 3, "temperature": 22.0})
            alert = await send_alert(client, "ESP32-SIM", shop_id, "SMOKE", "test alarm")

        assert reading.status_code == 200
        assert alert.status_code == 200
        assert len(registry.get_device("ESP32-SIM").data_history) == 1

    @pytest.mark.asyncio
    async def test_reading_before_pairing_is_rejected(self, pairing_app):
        async with _client(pairing_app) as client:
            response = await send_reading(client, "NEVER-PAIRED", "SHOP-1", {"smoke": 1})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pairing_without_id_raises(self, pairing_app):
        async with _client(pairing_app) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await pair_device(client, "")


class TestSimulatorAgainstHarness:
    @pytest.mark.asyncio
    async def test_ping(self, harness_app, request_log):
        async with _client(harness_app) as client:
            assert await ping(client) == "PONG"

        assert request_log.entries()[0].path == "/ping"
