"""Fixtures shared by the HomeWizard tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from aiohttp import web

from homewizard import DiscoveredDevice, DiscoveryEvent

P1_INFO = {
    "product_type": "HWE-P1",
    "product_name": "P1 meter",
    "serial": "3c39e7aabbcc",
    "firmware_version": "4.19",
    "api_version": "v1",
}

P1_DATA = {
    "smr_version": 50,
    "meter_model": "ISKRA 2M550T-101",
    "wifi_ssid": "home",
    "wifi_strength": 100,
    "total_power_import_t1_kwh": 1.0,
    "total_power_export_t1_kwh": 0.0,
    "total_power_import_t2_kwh": 2.0,
    "total_power_export_t2_kwh": 0.0,
    "active_power_w": 500.0,
    "active_power_l1_w": 500.0,
    "active_power_l2_w": 0.0,
    "active_power_l3_w": 0.0,
    "total_gas_m3": 1122.333,
    "gas_timestamp": 210314112233,
}

SOCKET_INFO = {
    "product_type": "HWE-SKT",
    "product_name": "Energy Socket",
    "serial": "3c39e72e33ce",
    "firmware_version": "3.02",
    "api_version": "v1",
}

SOCKET_DATA = {
    "wifi_ssid": "home",
    "wifi_strength": 94,
    "total_power_import_t1_kwh": 30.511,
    "total_power_export_t1_kwh": 0.0,
    "active_power_w": 12.3,
    "active_power_l1_w": 12.3,
}

WATER_INFO = {
    "product_type": "HWE-WTR",
    "product_name": "Watermeter",
    "serial": "3c39e72d7a68",
    "firmware_version": "2.03",
    "api_version": "v1",
}

WATER_DATA = {
    "wifi_ssid": "home",
    "wifi_strength": 84,
    "total_liter_m3": 123.456,
    "active_liter_lpm": 1.0,
}


def build_device_app(info: Any, data: Any, status: int = 200, delay: float = 0) -> web.Application:
    """Application answering like a HomeWizard device."""

    async def handle_api(request: web.Request) -> web.Response:
        if delay:
            await asyncio.sleep(delay)
        if status != 200:
            return web.Response(status=status)
        if isinstance(info, str):
            return web.Response(text=info)
        return web.json_response(info)

    async def handle_data(request: web.Request) -> web.Response:
        if isinstance(data, str):
            return web.Response(text=data)
        return web.json_response(data)

    app = web.Application()
    app.router.add_get("/api", handle_api)
    app.router.add_get("/api/v1/data", handle_data)
    return app


@pytest.fixture
def device_server(aiohttp_server):
    """Start a fake device and return it as a discovered device."""

    async def _start(
        info: Any, data: Any = None, status: int = 200, delay: float = 0, name: str = "device"
    ) -> DiscoveredDevice:
        server = await aiohttp_server(build_device_app(info, data, status, delay))
        return DiscoveredDevice(
            fullname=f"{name}._hwenergy._tcp.local.",
            addresses=(server.host,),
            port=server.port,
        )

    return _start


class FakeBrowseSession:
    """Browse session replaying a fixed list of events."""

    def __init__(self, events: list[DiscoveryEvent], hang: bool = False) -> None:
        self.events = events
        self.hang = hang
        self.entered = False
        self.closed = False

    async def __aenter__(self):
        self.entered = True
        return self._events()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.closed = True

    async def _events(self):
        for event in self.events:
            yield event
        if self.hang:
            await asyncio.Event().wait()


class FakeDiscovery:
    """Discovery returning a fixed device list."""

    def __init__(self, devices: list[DiscoveredDevice]) -> None:
        self.devices = devices
        self.timeouts: list[float] = []

    async def discover(self, timeout_seconds: float = 10) -> list[DiscoveredDevice]:
        self.timeouts.append(timeout_seconds)
        return self.devices
