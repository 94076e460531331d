"""
Shared pytest fixtures for the gateway tests.

Provides fixtures for:
- In-memory stores (DeviceRegistry, RequestLog)
- Pairing API and harness apps built around those stores
- TestClients for both apps (lifespan included)
"""
import pytest
from fastapi.testclient import TestClient

from gateway.harness import create_app as create_harness_app
from gateway.main import create_app as create_pairing_app
from gateway.services import DeviceRegistry, RequestLog


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def registry():
    """A fresh registry with a fixed seed."""
    return DeviceRegistry(seed=1234)


@pytest.fixture
def request_log():
    """A fresh request log with the default capacity."""
    return RequestLog(capacity=50)


# ============================================================================
# App Fixtures
# ============================================================================

@pytest.fixture
def pairing_app(registry):
    return create_pairing_app(registry=registry, body_limit=10 * 1024)


@pytest.fixture
def harness_app(request_log):
    return create_harness_app(request_log=request_log, body_limit=100 * 1024)


@pytest.fixture
def pairing_client(pairing_app):
    with TestClient(pairing_app) as client:
        yield client


@pytest.fixture
def harness_client(harness_app):
    with TestClient(harness_app) as client:
        yield client


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_reading():
    return {"smoke": 120, "temperature": 24.5, "humidity": 61}


@pytest.fixture
def paired_device(pairing_client):
    """Register D1 through the API and return (device_id, shop_id)."""
    response = pairing_client.post(
        "/api/register",
        json={"deviceId": "D1", "deviceType": "ESP32", "version": "1.0.0"},
    )
    assert response.status_code == 201
    return "D1", response.json()["shopId"]
