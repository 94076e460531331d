"""
API tests for the SIM900 test harness.
"""
import re

import pytest


class TestSimpleChecks:
    def test_get_test(self, harness_client):
        response = harness_client.get("/test")

        assert response.status_code == 200
        assert response.text == "OK - GET received from SIM900"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    def test_ping_any_method(self, harness_client, method):
        response = harness_client.request(method, "/ping")

        assert response.status_code == 200
        assert response.text == "PONG"


class TestEchoEndpoints:
    def test_get_data_echoes_query(self, harness_client):
        response = harness_client.get("/data", params={"temp": "24", "hum": "60"})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["received"] == {"temp": "24", "hum": "60"}

    def test_post_data_echoes_json(self, harness_client):
        response = harness_client.post("/data", json={"foo": "bar"})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["received"] == {"foo": "bar"}
        assert "timestamp" in body

    def test_post_data_echoes_text(self, harness_client):
        response = harness_client.post("/data", content="temp=24;hum=60", headers={"content-type": "text/plain"})

        assert response.json()["received"] == "temp=24;hum=60"

    def test_post_data_echoes_form(self, harness_client):
        response = harness_client.post("/data", data={"temp": "24"})

        assert response.json()["received"] == {"temp": "24"}

    def test_register_echoes_device_id(self, harness_client):
        response = harness_client.post("/register", json={"deviceId": "SIM900-ABC"})

        assert response.json() == {"success": True, "message": "Device registered", "deviceId": "SIM900-ABC"}

    def test_register_derives_device_id(self, harness_client, request_log):
        """Test a deviceId is made up from the request id when none is sent."""
        response = harness_client.post("/register", json={})

        device_id = response.json()["deviceId"]
        assert re.fullmatch(r"SIM900-\d+", device_id)
        assert device_id == f"SIM900-{request_log.entries()[0].id}"

    def test_alert_echoes_alert_type(self, harness_client):
        response = harness_client.post("/alert", json={"alertType": "SMOKE", "message": "help"})

        assert response.json()["alertType"] == "SMOKE"
        assert response.json()["success"] is True

    def test_sensor_acknowledged(self, harness_client):
        response = harness_client.post("/sensor", json={"temperature": 21})

        assert response.status_code == 200
        assert response.json()["message"] == "Sensor data received"


class TestCatchAll:
    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
    def test_unknown_route_is_acknowledged(self, harness_client, method):
        response = harness_client.request(method, "/some/unknown/path")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Request received",
            "method": method,
            "path": "/some/unknown/path",
        }

    @pytest.mark.parametrize("method", ["TRACE", "CONNECT"])
    def test_rare_methods_are_acknowledged(self, harness_client, request_log, method):
        """Test the catch-all answers every method, not just the common ones."""
        response = harness_client.request(method, "/odd")

        assert response.status_code == 200
        assert response.json()["method"] == method
        assert request_log.entries()[0].method == method

    def test_unknown_route_is_recorded(self, harness_client, request_log):
        harness_client.post("/weird", json={"x": 1})

        entry = request_log.entries()[0]
        assert entry.method == "POST"
        assert entry.path == "/weird"
        assert entry.body == {"x": 1}

    def test_post_root_is_caught(self, harness_client):
        assert harness_client.post("/").json()["path"] == "/"


class TestRequestLogging:
    def test_every_route_records(self, harness_client, request_log):
        harness_client.get("/test")
        harness_client.get("/ping")
        harness_client.get("/data", params={"a": "1"})
        harness_client.post("/sensor", json={})

        assert [e.path for e in request_log.entries()] == ["/sensor", "/data", "/ping", "/test"]
        assert request_log.entries()[1].query == {"a": "1"}

    def test_records_headers_and_origin(self, harness_client, request_log):
        harness_client.get("/test", headers={"user-agent": "SIMCOM_MODULE"})

        entry = request_log.entries()[0]
        assert entry.headers["user-agent"] == "SIMCOM_MODULE"
        assert entry.ip

    def test_log_stays_bounded(self, harness_client, request_log):
        for i in range(60):
            harness_client.post("/data", json={"i": i})

        entries = request_log.entries()
        assert len(entries) == 50
        assert entries[0].body == {"i": 59}
        assert entries[-1].body == {"i": 10}

    def test_malformed_json_returns_400(self, harness_client):
        response = harness_client.post("/data", content="{oops", headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body."}


class TestDashboard:
    def test_empty_dashboard(self, harness_client):
        response = harness_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "No requests yet" in response.text

    def test_latest_request_on_top(self, harness_client):
        """Test POST /data shows up first on the dashboard."""
        harness_client.get("/test")
        harness_client.post("/data", json={"foo": "bar"})

        html = harness_client.get("/").text

        assert '"foo": "bar"' in html
        assert html.index("/data") < html.index("/test")

    def test_viewing_dashboard_is_not_recorded(self, harness_client, request_log):
        harness_client.get("/")
        harness_client.get("/")

        assert len(request_log) == 0

    def test_html_in_body_is_escaped(self, harness_client):
        harness_client.post("/data", content="<script>alert(1)</script>", headers={"content-type": "text/plain"})

        html = harness_client.get("/").text

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_requests_json(self, harness_client):
        harness_client.post("/data", json={"foo": "bar"})

        entries = harness_client.get("/api/requests").json()

        assert len(entries) == 1
        assert entries[0]["method"] == "POST"
        assert entries[0]["body"] == {"foo": "bar"}
