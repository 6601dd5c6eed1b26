from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from wledticker.data.home_assistant import (
    EntitySpec,
    HomeAssistantClient,
    HomeAssistantError,
    HomeAssistantProvider,
    format_state,
)


@pytest.fixture()
def ha_client() -> HomeAssistantClient:
    return HomeAssistantClient("http://ha.local:8123/", "test-token")


def _mock_response(status_code: int, json_data: dict[str, Any] | None = None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Invalid JSON")
    return response


def test_get_state_sends_bearer_token(ha_client: HomeAssistantClient) -> None:
    response = _mock_response(200, {"entity_id": "sensor.t", "state": "21.5"})
    with patch("requests.get", return_value=response) as mock_get:
        state = ha_client.get_state("sensor.t")

    assert state["state"] == "21.5"
    args, kwargs = mock_get.call_args
    assert args[0] == "http://ha.local:8123/api/states/sensor.t"
    assert kwargs["headers"]["Authorization"] == "Bearer test-token"


def test_non_200_raises(ha_client: HomeAssistantClient) -> None:
    response = _mock_response(401, {"message": "Unauthorized"}, text="401: Unauthorized")
    with patch("requests.get", return_value=response):
        with pytest.raises(HomeAssistantError) as exc_info:
            ha_client.get_state("sensor.t")

    assert "401" in str(exc_info.value)


def test_network_error_raises(ha_client: HomeAssistantClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.Timeout("slow")):
        with pytest.raises(HomeAssistantError):
            ha_client.get_state("sensor.t")


def test_invalid_json_raises(ha_client: HomeAssistantClient) -> None:
    with patch("requests.get", return_value=_mock_response(200, None)):
        with pytest.raises(HomeAssistantError):
            ha_client.get_state("sensor.t")


def test_format_state_units() -> None:
    assert format_state({"state": "21.5", "attributes": {"unit_of_measurement": "°C"}}, "OUT") == "OUT 21.5°C"
    assert format_state({"state": "40", "attributes": {"unit_of_measurement": "%"}}, "HUM") == "HUM 40%"
    assert format_state({"state": "350", "attributes": {"unit_of_measurement": "W"}}) == "350 W"
    assert format_state({"state": "on", "attributes": {}}, "DOOR") == "DOOR on"


def test_format_state_null_attributes() -> None:
    assert format_state({"state": "5", "attributes": None}, "X") == "X 5"
    assert format_state({"state": "off"}) == "off"


def test_provider_joins_entities() -> None:
    client = MagicMock()
    client.get_state.side_effect = [
        {"state": "21.5", "attributes": {"unit_of_measurement": "°C"}},
        {"state": "40", "attributes": {"unit_of_measurement": "%"}},
    ]
    provider = HomeAssistantProvider(
        "ha",
        client=client,
        entities=[EntitySpec("sensor.out", "OUT"), EntitySpec("sensor.hum", "HUM")],
    )

    assert asyncio.run(provider.get_text()) == "OUT 21.5°C  HUM 40%"


def test_provider_requires_entities() -> None:
    with pytest.raises(ValueError):
        HomeAssistantProvider("ha", client=MagicMock(), entities=[])
