"""Collect one measurement from all HomeWizard devices on the network."""

from __future__ import annotations

import logging

import aiohttp

from .const import DEFAULT_REQUEST_TIMEOUT_SECONDS, DEFAULT_TIMEOUT_SECONDS
from .discovery import HomewizardDiscovery
from .exceptions import HomewizardError
from .homewizard import HomeWizard
from .models import (
    CollectionResult,
    Config,
    DeviceFailure,
    DiscoveredDevice,
    Measurement,
    Sample,
)

_LOGGER = logging.getLogger(__name__)


class HomewizardCollector:
    """Discover devices and turn their telemetry into a measurement."""

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        discovery: HomewizardDiscovery | None = None,
        websession: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            timeout_seconds: How long to browse for devices each cycle
            request_timeout: Total time in seconds allowed for each device request
            discovery: Optional discovery instance, defaults to mDNS
            websession: Optional aiohttp ClientSession shared by all device requests
        """
        self.timeout_seconds = timeout_seconds
        self.request_timeout = request_timeout
        self._discovery = discovery or HomewizardDiscovery()
        self._websession = websession

    async def collect(
        self, config: Config, last_measurement: Measurement | None = None
    ) -> CollectionResult:
        """Run one collection cycle.

        Devices that fail are skipped and reported in the result's failures;
        only a discovery failure is raised.
        """
        _LOGGER.info("Reading measurement from HomeWizard devices")
        measurement = Measurement(location=config.location)

        devices = await self._discovery.discover(self.timeout_seconds)

        failures: list[DeviceFailure] = []
        websession = self._websession or aiohttp.ClientSession()
        try:
            for device in devices:
                try:
                    samples = await self._get_samples(device, config, websession)
                except HomewizardError as err:
                    _LOGGER.warning("Skipping device %s: %s", device.fullname, err)
                    failures.append(DeviceFailure(device=device, reason=str(err)))
                    continue
                measurement.samples.extend(samples)
        finally:
            if self._websession is None:
                await websession.close()

        _LOGGER.info(
            "Read %s samples from %s of %s devices",
            len(measurement.samples),
            len(devices) - len(failures),
            len(devices),
        )
        return CollectionResult(measurement=measurement, failures=failures)

    async def get_measurement(
        self, config: Config, last_measurement: Measurement | None = None
    ) -> Measurement:
        """Run one collection cycle and return only the measurement."""
        result = await self.collect(config, last_measurement)
        return result.measurement

    async def _get_samples(
        self,
        device: DiscoveredDevice,
        config: Config,
        websession: aiohttp.ClientSession,
    ) -> list[Sample]:
        client = HomeWizard(
            device.host, websession=websession, request_timeout=self.request_timeout
        )
        info = await client.fetch_device_info()
        return await client.fetch_samples(info, config.friendly_name(info))

