"""
Device Gateway
==============

HTTP ingestion endpoints for GSM/GPRS modules (SIM900) and ESP32 boards.

HOW IT'S ORGANIZED:
------------------
- models/    = Data structures (what does a device / request look like?)
- services/  = In-memory stores (device registry, bounded request log)
- routers/   = API endpoints (the doors into our apps)
- main.py    = Service A: device pairing + data/alert ingestion
- harness.py = Service B: SIM900 test harness + request dashboard
"""

__version__ = "1.0.0"
