"""Data models for HomeWizard library."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .const import (
    DEFAULT_PORT,
    PRODUCT_TYPE_ENERGY_SOCKET,
    PRODUCT_TYPE_P1_METER,
    PRODUCT_TYPE_SINGLE_PHASE_KWH_METER,
    PRODUCT_TYPE_TRIPLE_PHASE_KWH_METER,
    PRODUCT_TYPE_WATER_METER,
    SOURCE,
)
from .exceptions import HomewizardDataError, HomewizardUnsupportedDeviceError


class DeviceType(Enum):
    """Closed set of supported HomeWizard devices."""

    P1_METER = "p1_meter"
    SINGLE_PHASE_KWH_METER = "single_phase_kwh_meter"
    TRIPLE_PHASE_KWH_METER = "triple_phase_kwh_meter"
    ENERGY_SOCKET = "energy_socket"
    WATER_METER = "water_meter"

    @classmethod
    def from_product_type(cls, product_type: str) -> DeviceType:
        """Map a vendor product type string to a device type."""
        try:
            return PRODUCT_TYPES[product_type]
        except KeyError:
            raise HomewizardUnsupportedDeviceError(
                f"Unsupported product type '{product_type}'"
            ) from None


PRODUCT_TYPES = {
    PRODUCT_TYPE_P1_METER: DeviceType.P1_METER,
    PRODUCT_TYPE_ENERGY_SOCKET: DeviceType.ENERGY_SOCKET,
    PRODUCT_TYPE_WATER_METER: DeviceType.WATER_METER,
    PRODUCT_TYPE_SINGLE_PHASE_KWH_METER: DeviceType.SINGLE_PHASE_KWH_METER,
    PRODUCT_TYPE_TRIPLE_PHASE_KWH_METER: DeviceType.TRIPLE_PHASE_KWH_METER,
}


class EntityType(Enum):
    """What a sample is attached to."""

    DEVICE = "device"
    TARIFF = "tariff"


class SampleType(Enum):
    """Physical quantity of a sample."""

    ELECTRICITY_CONSUMPTION = "electricity_consumption"
    ELECTRICITY_PRODUCTION = "electricity_production"
    WATER_CONSUMPTION = "water_consumption"


class MetricType(Enum):
    """Counter values only grow, gauge values are instantaneous."""

    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass
class Config:
    """Per-cycle configuration supplied by the caller."""

    location: str
    names: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a config from a parsed config file."""
        if not isinstance(data, dict) or "location" not in data:
            raise ValueError("Config requires a 'location'")
        names = data.get("names") or {}
        if not isinstance(names, dict):
            raise ValueError("Config 'names' must map serials to names")
        return cls(
            location=str(data["location"]),
            names={str(serial): str(name) for serial, name in names.items()},
        )

    def friendly_name(self, info: DeviceInfo) -> str:
        """Return the configured name for a device, else its product name."""
        return self.names.get(info.serial, info.product_name)


@dataclass(frozen=True)
class DiscoveredDevice:
    """A device found through mDNS."""

    fullname: str
    addresses: tuple[str, ...]
    port: int = DEFAULT_PORT

    @property
    def address(self) -> str:
        """First advertised address, the only one used to reach the device."""
        if not self.addresses:
            raise HomewizardDataError(f"Device {self.fullname} has no address")
        return self.addresses[0]

    @property
    def host(self) -> str:
        """Host part of the device URL."""
        if self.port == DEFAULT_PORT:
            return self.address
        return f"{self.address}:{self.port}"


@dataclass
class DeviceInfo:
    """Response of the /api introspection endpoint."""

    product_type: str
    product_name: str
    serial: str
    firmware_version: str
    api_version: str

    @property
    def device_type(self) -> DeviceType:
        """Device type derived from the product type."""
        return DeviceType.from_product_type(self.product_type)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceInfo:
        """Decode the /api response."""
        return cls(
            product_type=_required_str(data, "product_type"),
            product_name=_required_str(data, "product_name"),
            serial=_required_str(data, "serial"),
            firmware_version=_required_str(data, "firmware_version"),
            api_version=_required_str(data, "api_version"),
        )


@dataclass
class Sample:
    """One normalized reading."""

    entity_type: EntityType
    entity_name: str
    sample_type: SampleType
    sample_name: str
    metric_type: MetricType
    value: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize the sample."""
        return {
            "entityType": self.entity_type.value,
            "entityName": self.entity_name,
            "sampleType": self.sample_type.value,
            "sampleName": self.sample_name,
            "metricType": self.metric_type.value,
            "value": self.value,
        }


@dataclass
class Measurement:
    """All samples collected during one cycle."""

    location: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    source: str = SOURCE
    samples: list[Sample] = field(default_factory=list)
    measured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the measurement for publication."""
        return {
            "id": self.id,
            "source": self.source,
            "location": self.location,
            "samples": [sample.to_dict() for sample in self.samples],
            "measuredAtTime": self.measured_at.isoformat(),
        }


@dataclass
class DeviceFailure:
    """A device that was skipped and why."""

    device: DiscoveredDevice
    reason: str


@dataclass
class CollectionResult:
    """Measurement plus diagnostics for the devices that were skipped."""

    measurement: Measurement
    failures: list[DeviceFailure] = field(default_factory=list)


@dataclass
class EnergySocketData:
    """Telemetry of an energy socket."""

    total_power_import_t1_kwh: float
    total_power_export_t1_kwh: float
    active_power_w: float
    active_power_l1_w: float | None = None
    wifi_ssid: str | None = None
    wifi_strength: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EnergySocketData:
        """Decode the data endpoint response."""
        return cls(
            total_power_import_t1_kwh=_required_float(data, "total_power_import_t1_kwh"),
            total_power_export_t1_kwh=_required_float(data, "total_power_export_t1_kwh"),
            active_power_w=_required_float(data, "active_power_w"),
            active_power_l1_w=data.get("active_power_l1_w"),
            wifi_ssid=data.get("wifi_ssid"),
            wifi_strength=data.get("wifi_strength"),
        )


@dataclass
class SinglePhaseKwhMeterData(EnergySocketData):
    """Telemetry of a single phase kWh meter (SDM230)."""


@dataclass
class TriplePhaseKwhMeterData:
    """Telemetry of a three phase kWh meter (SDM630)."""

    total_power_import_t1_kwh: float
    total_power_export_t1_kwh: float
    active_power_w: float
    active_power_l1_w: float | None = None
    active_power_l2_w: float | None = None
    active_power_l3_w: float | None = None
    wifi_ssid: str | None = None
    wifi_strength: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TriplePhaseKwhMeterData:
        """Decode the data endpoint response."""
        return cls(
            total_power_import_t1_kwh=_required_float(data, "total_power_import_t1_kwh"),
            total_power_export_t1_kwh=_required_float(data, "total_power_export_t1_kwh"),
            active_power_w=_required_float(data, "active_power_w"),
            active_power_l1_w=data.get("active_power_l1_w"),
            active_power_l2_w=data.get("active_power_l2_w"),
            active_power_l3_w=data.get("active_power_l3_w"),
            wifi_ssid=data.get("wifi_ssid"),
            wifi_strength=data.get("wifi_strength"),
        )


@dataclass
class WaterMeterData:
    """Telemetry of a water meter."""

    total_liter_m3: float
    active_liter_lpm: float
    wifi_ssid: str | None = None
    wifi_strength: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WaterMeterData:
        """Decode the data endpoint response."""
        return cls(
            total_liter_m3=_required_float(data, "total_liter_m3"),
            active_liter_lpm=_required_float(data, "active_liter_lpm"),
            wifi_ssid=data.get("wifi_ssid"),
            wifi_strength=data.get("wifi_strength"),
        )


@dataclass
class P1MeterData:
    """Telemetry of a P1 smart meter dongle."""

    total_power_import_t1_kwh: float
    total_power_export_t1_kwh: float
    total_power_import_t2_kwh: float
    total_power_export_t2_kwh: float
    active_power_w: float
    active_power_l1_w: float | None = None
    active_power_l2_w: float | None = None
    active_power_l3_w: float | None = None
    total_gas_m3: float | None = None
    gas_timestamp: int | None = None
    smr_version: int | None = None
    meter_model: str | None = None
    wifi_ssid: str | None = None
    wifi_strength: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> P1MeterData:
        """Decode the data endpoint response."""
        return cls(
            total_power_import_t1_kwh=_required_float(data, "total_power_import_t1_kwh"),
            total_power_export_t1_kwh=_required_float(data, "total_power_export_t1_kwh"),
            total_power_import_t2_kwh=_required_float(data, "total_power_import_t2_kwh"),
            total_power_export_t2_kwh=_required_float(data, "total_power_export_t2_kwh"),
            active_power_w=_required_float(data, "active_power_w"),
            active_power_l1_w=data.get("active_power_l1_w"),
            active_power_l2_w=data.get("active_power_l2_w"),
            active_power_l3_w=data.get("active_power_l3_w"),
            total_gas_m3=data.get("total_gas_m3"),
            gas_timestamp=data.get("gas_timestamp"),
            smr_version=data.get("smr_version"),
            meter_model=data.get("meter_model"),
            wifi_ssid=data.get("wifi_ssid"),
            wifi_strength=data.get("wifi_strength"),
        )


def _required_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise HomewizardDataError(f"Missing or invalid '{key}' in response")
    return value


def _required_float(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    # bool is an int subclass but never a valid reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HomewizardDataError(f"Missing or invalid '{key}' in response")
    return float(value)
