"""Projection of device telemetry onto generic samples."""

from __future__ import annotations

from typing import Any

from .const import TARIFF_T1_EXPORT, TARIFF_T1_IMPORT, TARIFF_T2_EXPORT, TARIFF_T2_IMPORT
from .exceptions import HomewizardDataError
from .models import (
    DeviceInfo,
    DeviceType,
    EnergySocketData,
    EntityType,
    MetricType,
    P1MeterData,
    Sample,
    SampleType,
    SinglePhaseKwhMeterData,
    TriplePhaseKwhMeterData,
    WaterMeterData,
)


def kwh_to_joule(kwh: float) -> float:
    """Convert kWh to J."""
    return kwh * 1000 * 3600


def lpm_to_flow(lpm: float) -> float:
    """Convert a liter per minute flow to the reported water flow unit."""
    return lpm * 60 / 1000


def build_samples(info: DeviceInfo, data: dict[str, Any], friendly_name: str) -> list[Sample]:
    """Map a raw data payload to the samples of the device type.

    Either the complete sample list for the device is returned or an
    exception is raised; a partial list is never produced.

    Args:
        info: Response of the device's /api endpoint
        data: Decoded JSON of the device's data endpoint
        friendly_name: Name to use for device samples
    """
    device_type = info.device_type
    entity_name = info.product_type

    if device_type in (
        DeviceType.ENERGY_SOCKET,
        DeviceType.SINGLE_PHASE_KWH_METER,
        DeviceType.TRIPLE_PHASE_KWH_METER,
    ):
        if device_type == DeviceType.ENERGY_SOCKET:
            power = EnergySocketData.from_dict(data)
        elif device_type == DeviceType.SINGLE_PHASE_KWH_METER:
            power = SinglePhaseKwhMeterData.from_dict(data)
        else:
            power = TriplePhaseKwhMeterData.from_dict(data)
        return [
            Sample(
                entity_type=EntityType.DEVICE,
                entity_name=entity_name,
                sample_type=SampleType.ELECTRICITY_CONSUMPTION,
                sample_name=friendly_name,
                metric_type=MetricType.COUNTER,
                value=kwh_to_joule(power.total_power_import_t1_kwh),
            ),
            Sample(
                entity_type=EntityType.DEVICE,
                entity_name=entity_name,
                sample_type=SampleType.ELECTRICITY_PRODUCTION,
                sample_name=friendly_name,
                metric_type=MetricType.COUNTER,
                value=kwh_to_joule(power.total_power_export_t1_kwh),
            ),
            Sample(
                entity_type=EntityType.DEVICE,
                entity_name=entity_name,
                sample_type=SampleType.ELECTRICITY_CONSUMPTION,
                sample_name=friendly_name,
                metric_type=MetricType.GAUGE,
                value=power.active_power_w,
            ),
        ]

    if device_type == DeviceType.WATER_METER:
        water = WaterMeterData.from_dict(data)
        return [
            Sample(
                entity_type=EntityType.DEVICE,
                entity_name=entity_name,
                sample_type=SampleType.WATER_CONSUMPTION,
                sample_name=friendly_name,
                metric_type=MetricType.COUNTER,
                value=water.total_liter_m3,
            ),
            Sample(
                entity_type=EntityType.DEVICE,
                entity_name=entity_name,
                sample_type=SampleType.WATER_CONSUMPTION,
                sample_name=friendly_name,
                metric_type=MetricType.GAUGE,
                value=lpm_to_flow(water.active_liter_lpm),
            ),
        ]

    if device_type == DeviceType.P1_METER:
        p1 = P1MeterData.from_dict(data)
        tariffs = [
            (SampleType.ELECTRICITY_CONSUMPTION, TARIFF_T1_IMPORT, p1.total_power_import_t1_kwh),
            (SampleType.ELECTRICITY_PRODUCTION, TARIFF_T1_EXPORT, p1.total_power_export_t1_kwh),
            (SampleType.ELECTRICITY_CONSUMPTION, TARIFF_T2_IMPORT, p1.total_power_import_t2_kwh),
            (SampleType.ELECTRICITY_PRODUCTION, TARIFF_T2_EXPORT, p1.total_power_export_t2_kwh),
        ]
        samples = [
            Sample(
                entity_type=EntityType.TARIFF,
                entity_name=entity_name,
                sample_type=sample_type,
                sample_name=label,
                metric_type=MetricType.COUNTER,
                value=kwh_to_joule(kwh),
            )
            for sample_type, label, kwh in tariffs
        ]
        samples.append(
            Sample(
                entity_type=EntityType.DEVICE,
                entity_name=entity_name,
                sample_type=SampleType.ELECTRICITY_CONSUMPTION,
                sample_name=friendly_name,
                metric_type=MetricType.GAUGE,
                value=p1.active_power_w,
            )
        )
        return samples

    # Unreachable while every DeviceType member has a branch above
    raise HomewizardDataError(f"No sample mapping for {device_type}")
