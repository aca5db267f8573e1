"""mDNS discovery of HomeWizard devices."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AsyncContextManager, AsyncIterator, Callable

from zeroconf import Error as ZeroconfError
from zeroconf import IPVersion, ServiceStateChange, Zeroconf
from zeroconf.asyncio import AsyncServiceBrowser, AsyncServiceInfo, AsyncZeroconf

from .const import DEFAULT_PORT, DEFAULT_TIMEOUT_SECONDS, RESOLVE_TIMEOUT_MS, SERVICE_TYPE
from .exceptions import HomewizardDiscoveryError
from .models import DiscoveredDevice

_LOGGER = logging.getLogger(__name__)


class DiscoveryEventType(Enum):
    """Kinds of events produced while browsing."""

    FOUND = "found"
    RESOLVED = "resolved"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiscoveryEvent:
    """A single browse event; only resolved events carry addresses."""

    type: DiscoveryEventType
    fullname: str
    addresses: tuple[str, ...] = ()
    port: int = DEFAULT_PORT


async def collect_devices(
    events: AsyncIterator[DiscoveryEvent], timeout: float
) -> list[DiscoveredDevice]:
    """Consume browse events until the timeout elapses or the stream ends.

    Devices are keyed by fullname, a later resolution of the same service
    replaces the addresses of the earlier one.
    """
    loop = asyncio.get_running_loop()
    start = loop.time()
    deadline = start + timeout
    devices: dict[str, DiscoveredDevice] = {}
    iterator = events.__aiter__()

    while (remaining := deadline - loop.time()) > 0:
        try:
            event = await asyncio.wait_for(iterator.__anext__(), remaining)
        except StopAsyncIteration:
            break
        except asyncio.TimeoutError:
            break

        elapsed = loop.time() - start
        if event.type is DiscoveryEventType.RESOLVED:
            _LOGGER.debug(
                "At %.2fs: resolved %s IP: %s", elapsed, event.fullname, event.addresses
            )
            devices[event.fullname] = DiscoveredDevice(
                fullname=event.fullname,
                addresses=event.addresses,
                port=event.port,
            )
        else:
            _LOGGER.debug("At %.2fs: %s %s", elapsed, event.type.value, event.fullname)

    return list(devices.values())


class ZeroconfBrowseSession:
    """Browse session for one service type, closed on exit."""

    def __init__(
        self,
        service_type: str = SERVICE_TYPE,
        resolve_timeout_ms: int = RESOLVE_TIMEOUT_MS,
    ) -> None:
        """Initialize the browse session.

        Args:
            service_type: mDNS service type to browse for
            resolve_timeout_ms: Time allowed to resolve one announced service
        """
        self._service_type = service_type
        self._resolve_timeout_ms = resolve_timeout_ms
        self._aiozc: AsyncZeroconf | None = None
        self._browser: AsyncServiceBrowser | None = None
        self._queue: asyncio.Queue[tuple[ServiceStateChange, str]] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None

    async def __aenter__(self) -> ZeroconfBrowseSession:
        """Start zeroconf and the service browser."""
        self._loop = asyncio.get_running_loop()
        try:
            self._aiozc = AsyncZeroconf(ip_version=IPVersion.V4Only)
            self._browser = AsyncServiceBrowser(
                self._aiozc.zeroconf,
                [self._service_type],
                handlers=[self._on_service_state_change],
            )
        except (OSError, ZeroconfError) as err:
            await self._close()
            raise HomewizardDiscoveryError(f"Failed to start mDNS browse: {err}") from err
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Stop the browser and close zeroconf."""
        await self._close()

    async def _close(self) -> None:
        """Cancel the browser and close zeroconf if they were started."""
        if self._browser is not None:
            await self._browser.async_cancel()
            self._browser = None
        if self._aiozc is not None:
            await self._aiozc.async_close()
            self._aiozc = None

    def _on_service_state_change(
        self,
        zeroconf: Zeroconf,
        service_type: str,
        name: str,
        state_change: ServiceStateChange,
    ) -> None:
        """Queue a browser state change for the event loop."""
        assert self._loop is not None
        self._loop.call_soon_threadsafe(self._queue.put_nowait, (state_change, name))

    def __aiter__(self) -> ZeroconfBrowseSession:
        """Return the session as its own event iterator."""
        return self

    async def __anext__(self) -> DiscoveryEvent:
        """Wait for the next state change and resolve it into an event."""
        if self._aiozc is None:
            raise StopAsyncIteration
        state_change, name = await self._queue.get()
        if state_change is ServiceStateChange.Removed:
            return DiscoveryEvent(DiscoveryEventType.REMOVED, name)

        info = AsyncServiceInfo(self._service_type, name)
        if not await info.async_request(self._aiozc.zeroconf, self._resolve_timeout_ms):
            return DiscoveryEvent(DiscoveryEventType.FOUND, name)
        return DiscoveryEvent(
            DiscoveryEventType.RESOLVED,
            info.name,
            addresses=tuple(info.parsed_addresses(IPVersion.V4Only)),
            port=info.port or DEFAULT_PORT,
        )


class HomewizardDiscovery:
    """Find HomeWizard devices on the local network."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncContextManager[AsyncIterator[DiscoveryEvent]]]
        | None = None,
    ) -> None:
        """Initialize discovery.

        Args:
            session_factory: Optional callable returning a browse session. Defaults to mDNS.
        """
        self._session_factory = session_factory or ZeroconfBrowseSession

    async def discover(
        self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    ) -> list[DiscoveredDevice]:
        """Browse for devices during timeout_seconds.

        Raises HomewizardDiscoveryError when the browse session cannot start.
        """
        async with self._session_factory() as events:
            devices = await collect_devices(events, timeout_seconds)
        _LOGGER.debug("Discovered %s devices", len(devices))
        return devices
