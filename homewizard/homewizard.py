"""HomeWizard client for reading local devices."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .const import DEFAULT_REQUEST_TIMEOUT_SECONDS, ENDPOINT_API, ENDPOINT_DATA
from .exceptions import HomewizardConnectionError, HomewizardDataError, HomewizardError
from .models import DeviceInfo, DeviceType, Sample
from .samples import build_samples

_LOGGER = logging.getLogger(__name__)


class HomeWizard:
    """Client for the local API of a single HomeWizard device."""

    def __init__(
        self,
        host: str,
        websession: aiohttp.ClientSession | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the HomeWizard connection.

        Args:
            host: Hostname or IP address of the device, optionally with a port
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            request_timeout: Total time in seconds allowed for each request
        """
        if not host.startswith("http"):
            host = f"http://{host}"
        self.base_url = host
        self._websession = websession
        self._own_session = websession is None
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def __aenter__(self) -> HomeWizard:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close_connection()

    async def _get_json(self, endpoint: str) -> dict[str, Any]:
        """GET an endpoint and return its JSON object."""
        await self._ensure_session()
        assert self._websession is not None
        url = f"{self.base_url}{endpoint}"
        try:
            async with self._websession.get(url, timeout=self._timeout) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        except aiohttp.ClientError as err:
            raise HomewizardConnectionError(f"Failed to connect to device: {err}") from err
        except asyncio.TimeoutError as err:
            raise HomewizardConnectionError(f"Timeout connecting to {url}") from err
        except ValueError as err:
            raise HomewizardDataError(f"Failed to parse response of {url}: {err}") from err

        if not isinstance(data, dict):
            raise HomewizardDataError(f"Expected a JSON object from {url}")
        _LOGGER.debug("Response %s: %s", url, data)
        return data

    async def fetch_device_info(self) -> DeviceInfo:
        """Fetch product type, name, serial and API version of the device.

        Raises HomewizardUnsupportedDeviceError when the product type is unknown.
        """
        data = await self._get_json(ENDPOINT_API)
        info = DeviceInfo.from_dict(data)
        DeviceType.from_product_type(info.product_type)
        return info

    async def fetch_data(self, api_version: str) -> dict[str, Any]:
        """Fetch the raw telemetry payload of the device."""
        return await self._get_json(ENDPOINT_DATA.format(api_version=api_version))

    async def fetch_samples(self, info: DeviceInfo, friendly_name: str) -> list[Sample]:
        """Fetch telemetry and normalize it into samples."""
        data = await self.fetch_data(info.api_version)
        try:
            return build_samples(info, data, friendly_name)
        except HomewizardError:
            raise
        except (TypeError, ValueError) as err:
            raise HomewizardDataError(f"Failed to parse telemetry: {err}") from err
