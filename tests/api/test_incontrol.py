"""Tests for jlrcmd.api.incontrol: the per-vehicle facade."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest

from jlrcmd.api.errors import ChargerNotConnectedError, ConfigError, WakeUpTimeoutError
from jlrcmd.api.incontrol import InControl
from jlrcmd.api.wake import WakeUpPoller
from jlrcmd.models.config import AppSettings
from jlrcmd.models.vehicle import Vehicle
from tests.constants import DEVICE_ID, IF9, PASSWORD, PIN, USER_ID, USERNAME, VIN

if TYPE_CHECKING:
    from pytest_httpx import HTTPXMock

    from jlrcmd.api.client import InControlClient
    from jlrcmd.auth.session import SessionManager

AUTH_URL = f"{IF9}/vehicles/{VIN}/users/{USER_ID}/authenticate"
STATUS_URL = f"{IF9}/vehicles/{VIN}/status"


def _charging_method(httpx_mock: HTTPXMock, method: str) -> None:
    httpx_mock.add_response(
        url=STATUS_URL,
        json={"vehicleStatus": [{"key": "EV_CHARGING_METHOD", "value": method}]},
    )


@pytest.fixture
def poller() -> MagicMock:
    p = MagicMock(spec=WakeUpPoller)
    p.wake_up = AsyncMock(return_value=Vehicle(vin=VIN, state="online"))
    return p


def _facade(
    client: InControlClient,
    sessions: SessionManager,
    poller: MagicMock,
    **kwargs: object,
) -> InControl:
    return InControl(
        client,
        username=USERNAME,
        password=PASSWORD,
        vin=VIN,
        pin=PIN,
        wait_minutes=2,
        sessions=sessions,
        poller=poller,
        **kwargs,  # type: ignore[arg-type]
    )


class TestCommandsWake:
    @pytest.mark.asyncio
    async def test_lock_wakes_first(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        httpx_mock.add_response(url=AUTH_URL, method="POST", json={"token": "t"})
        httpx_mock.add_response(url=f"{IF9}/vehicles/{VIN}/lock", method="POST", json={})
        ic = _facade(client, sessions, poller)

        await ic.lock_vehicle()

        poller.wake_up.assert_awaited_once_with(2)
        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_wake_timeout_blocks_command(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        poller.wake_up.side_effect = WakeUpTimeoutError(2, 121_000)
        ic = _facade(client, sessions, poller)

        with pytest.raises(WakeUpTimeoutError):
            await ic.unlock_vehicle()
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_wake_can_be_disabled(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        _charging_method(httpx_mock, "WIRED")
        httpx_mock.add_response(url=AUTH_URL, method="POST", json={"token": "t"})
        httpx_mock.add_response(
            url=f"{IF9}/vehicles/{VIN}/chargeProfile", method="POST", json={}
        )
        ic = _facade(client, sessions, poller, wake_before_commands=False)

        await ic.start_charging()

        poller.wake_up.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_climate_target_is_clamped(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        httpx_mock.add_response(url=AUTH_URL, method="POST", json={"token": "t"})
        httpx_mock.add_response(
            url=f"{IF9}/vehicles/{VIN}/preconditioning", method="POST", json={}
        )
        ic = _facade(client, sessions, poller)

        await ic.start_preconditioning(40)

        body = json.loads(httpx_mock.get_requests()[1].content)
        assert body["serviceParameters"][1] == {
            "key": "TARGET_TEMPERATURE_CELSIUS",
            "value": "285",
        }


class TestChargingGuard:
    @pytest.mark.asyncio
    async def test_unplugged_vehicle_sends_no_command(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        _charging_method(httpx_mock, "NOT_CONNECTED")
        ic = _facade(client, sessions, poller)

        with pytest.raises(ChargerNotConnectedError, match="NOT_CONNECTED"):
            await ic.start_charging()

        poller.wake_up.assert_not_awaited()
        assert [r.url.path.rsplit("/", 1)[-1] for r in httpx_mock.get_requests()] == ["status"]

    @pytest.mark.asyncio
    async def test_plugged_in_vehicle_checks_status_first(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        _charging_method(httpx_mock, "WIRED")
        httpx_mock.add_response(url=AUTH_URL, method="POST", json={"token": "t"})
        httpx_mock.add_response(
            url=f"{IF9}/vehicles/{VIN}/chargeProfile", method="POST", json={}
        )
        ic = _facade(client, sessions, poller)

        await ic.start_charging()

        poller.wake_up.assert_awaited_once_with(2)
        paths = [r.url.path.rsplit("/", 1)[-1] for r in httpx_mock.get_requests()]
        assert paths == ["status", "authenticate", "chargeProfile"]

    @pytest.mark.asyncio
    async def test_stop_charging_skips_the_check(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        httpx_mock.add_response(url=AUTH_URL, method="POST", json={"token": "t"})
        httpx_mock.add_response(
            url=f"{IF9}/vehicles/{VIN}/chargeProfile", method="POST", json={}
        )
        ic = _facade(client, sessions, poller)

        await ic.stop_charging()

        assert len(httpx_mock.get_requests()) == 2


class TestReads:
    @pytest.mark.asyncio
    async def test_status_does_not_wake(
        self,
        httpx_mock: HTTPXMock,
        client: InControlClient,
        sessions: SessionManager,
        poller: MagicMock,
    ) -> None:
        httpx_mock.add_response(
            url=f"{IF9}/vehicles/{VIN}/status",
            json={"vehicleStatus": [{"key": "EV_STATE_OF_CHARGE", "value": "55"}]},
        )
        ic = _facade(client, sessions, poller)

        status = await ic.get_vehicle_status()

        assert status.battery_level == 55
        poller.wake_up.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_explicit_wake_uses_configured_wait(
        self, client: InControlClient, sessions: SessionManager, poller: MagicMock
    ) -> None:
        ic = _facade(client, sessions, poller)
        vehicle = await ic.wake_up()
        assert vehicle.is_online
        poller.wake_up.assert_awaited_once_with(2)


class TestFromSettings:
    def test_missing_values_are_named(self) -> None:
        settings = AppSettings(
            _env_file=None,  # type: ignore[call-arg]
            username=USERNAME,
            password=None,
            device_id=None,
            vin=None,
        )
        with pytest.raises(ConfigError) as exc_info:
            InControl.from_settings(settings)
        message = str(exc_info.value)
        assert "JLR_PASSWORD" in message
        assert "JLR_DEVICE_ID" in message
        assert "JLR_VIN" in message
        assert "JLR_USERNAME" not in message

    @pytest.mark.asyncio
    async def test_builds_from_complete_settings(self) -> None:
        settings = AppSettings(
            _env_file=None,  # type: ignore[call-arg]
            username=USERNAME,
            password=PASSWORD,
            device_id=DEVICE_ID,
            vin="IGNORED",
            pin=PIN,
            wait_minutes=3,
            wake_before_commands=False,
        )
        ic = InControl.from_settings(settings, vin=VIN)
        try:
            assert ic.vin == VIN
            assert ic.wait_minutes == 3
            assert ic.wake_before_commands is False
        finally:
            await ic.close()
