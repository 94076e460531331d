"""
Gateway Configuration
=====================

Settings for both services, loaded from environment variables.
A local `.env` file is picked up automatically.
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load environment variables from .env file
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


class Config:
    """
    Application configuration loaded from environment variables.

    Environment Variables:
        HOST: Interface to bind (default: 0.0.0.0, all interfaces)
        PAIRING_PORT: Port of the pairing API (default: 3001)
        HARNESS_PORT: Port of the SIM900 test harness (default: 3000)
        BODY_LIMIT_BYTES: Max request body for the pairing API (default: 10 KB)
        HARNESS_BODY_LIMIT_BYTES: Max request body for the harness (default: 100 KB)
        REQUEST_LOG_CAPACITY: Requests kept for the dashboard (default: 50)
        SHOP_ID_PREFIX: Prefix of assigned shop ids (default: SHOP-)
        SHOP_ID_RANGE: Shop numbers are drawn from 0..RANGE-1 (default: 1000)
        SHOP_ID_SEED: Seed for the shop id generator (default: unset, random)
        MAX_SAMPLES_PER_DEVICE: Cap on stored samples per device (default: unset, no cap)
        CORS_ORIGINS: Comma separated list of allowed origins (default: *)
        LOG_LEVEL: Logging level (default: INFO)
    """

    HOST = os.getenv("HOST", "0.0.0.0")

    PAIRING_PORT = int(os.getenv("PAIRING_PORT", "3001"))
    HARNESS_PORT = int(os.getenv("HARNESS_PORT", "3000"))

    # Keeps large, malicious payloads away from the modules' endpoint
    BODY_LIMIT_BYTES = int(os.getenv("BODY_LIMIT_BYTES", str(10 * 1024)))
    HARNESS_BODY_LIMIT_BYTES = int(os.getenv("HARNESS_BODY_LIMIT_BYTES", str(100 * 1024)))

    REQUEST_LOG_CAPACITY = int(os.getenv("REQUEST_LOG_CAPACITY", "50"))

    SHOP_ID_PREFIX = os.getenv("SHOP_ID_PREFIX", "SHOP-")
    SHOP_ID_RANGE = int(os.getenv("SHOP_ID_RANGE", "1000"))
    SHOP_ID_SEED = _optional_int("SHOP_ID_SEED")

    MAX_SAMPLES_PER_DEVICE = _optional_int("MAX_SAMPLES_PER_DEVICE")

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
