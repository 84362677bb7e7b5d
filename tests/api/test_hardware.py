"""Tests for the device telemetry endpoint."""

import time

from flask.testing import FlaskClient


class TestHardwareUpdate:
    """Tests for POST /api/hardware/update."""

    def test_battery_only(
        self,
        client: FlaskClient,
        auth_client: FlaskClient,
        device_headers: dict[str, str],
    ) -> None:
        response = client.post(
            "/api/hardware/update", json={"battery": 55}, headers=device_headers
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["success"] is True
        assert data["message"] == "Hardware update received"
        assert data["updated"] == ["battery"]

        settings = auth_client.get("/api/settings").get_json()["settings"]
        assert settings["BATTERY_LEVEL"] == "55"
        assert settings["IS_CONNECTED"] == "1"
        assert settings["LAST_HEARTBEAT"] != ""
        assert settings["CURRENT_WEIGHT"] == "0"

    def test_heartbeat_is_refreshed(
        self,
        client: FlaskClient,
        auth_client: FlaskClient,
        device_headers: dict[str, str],
    ) -> None:
        client.post("/api/hardware/update", json={}, headers=device_headers)
        first = auth_client.get("/api/settings").get_json()["settings"]["LAST_HEARTBEAT"]

        time.sleep(1.1)
        client.post("/api/hardware/update", json={}, headers=device_headers)
        second = auth_client.get("/api/settings").get_json()["settings"]["LAST_HEARTBEAT"]

        assert second > first

    def test_weight_and_battery_order(
        self, client: FlaskClient, device_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/hardware/update",
            json={"battery": 90, "weight": 400},
            headers=device_headers,
        )

        assert response.get_json()["updated"] == ["weight", "battery"]

    def test_dispensed_is_recorded(
        self,
        client: FlaskClient,
        auth_client: FlaskClient,
        device_headers: dict[str, str],
    ) -> None:
        client.post("/api/hardware/update", json={"dispensed": 2}, headers=device_headers)

        history = auth_client.get("/api/history").get_json()["history"]
        alerts = auth_client.get("/api/alerts").get_json()["alerts"]
        assert [(h["rounds"], h["type"], h["status"]) for h in history] == [
            (2, "Scheduled", "Success")
        ]
        assert alerts[0]["message"] == "Device dispensed 2 rounds automatically."

    def test_invalid_values(self, client: FlaskClient, device_headers: dict[str, str]) -> None:
        for body in (
            {"battery": 101},
            {"weight": -1},
            {"weight": "heavy"},
            {"weight": True},
            {"battery": False},
            {"dispensed": True},
        ):
            response = client.post("/api/hardware/update", json=body, headers=device_headers)
            assert response.status_code == 400, body
