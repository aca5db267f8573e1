"""Tests for mapping device telemetry onto samples."""

import pytest

from homewizard import DeviceInfo, EntityType, HomewizardDataError, MetricType, SampleType
from homewizard.samples import build_samples, kwh_to_joule, lpm_to_flow

from .conftest import P1_DATA, P1_INFO, SOCKET_DATA, SOCKET_INFO, WATER_DATA, WATER_INFO


def test_kwh_to_joule():
    assert kwh_to_joule(1.0) == 3_600_000
    assert kwh_to_joule(0.0) == 0


def test_lpm_to_flow():
    assert lpm_to_flow(1.0) == 0.06


def test_p1_meter_samples():
    samples = build_samples(DeviceInfo.from_dict(P1_INFO), P1_DATA, "Meter cupboard")

    assert [sample.value for sample in samples] == [3_600_000, 0, 7_200_000, 0, 500]
    assert [sample.sample_name for sample in samples] == [
        "t1 import",
        "t1 export",
        "t2 import",
        "t2 export",
        "Meter cupboard",
    ]
    assert [sample.entity_type for sample in samples] == [EntityType.TARIFF] * 4 + [
        EntityType.DEVICE
    ]
    assert [sample.sample_type for sample in samples] == [
        SampleType.ELECTRICITY_CONSUMPTION,
        SampleType.ELECTRICITY_PRODUCTION,
        SampleType.ELECTRICITY_CONSUMPTION,
        SampleType.ELECTRICITY_PRODUCTION,
        SampleType.ELECTRICITY_CONSUMPTION,
    ]
    assert [sample.metric_type for sample in samples] == [MetricType.COUNTER] * 4 + [
        MetricType.GAUGE
    ]
    assert {sample.entity_name for sample in samples} == {"HWE-P1"}


@pytest.mark.parametrize("product_type", ["HWE-SKT", "SDM230-wifi", "SDM630-wifi"])
def test_power_meter_samples(product_type):
    info = DeviceInfo.from_dict({**SOCKET_INFO, "product_type": product_type})

    samples = build_samples(info, SOCKET_DATA, "Dishwasher")

    assert len(samples) == 3
    import_counter, export_counter, power = samples
    assert import_counter.sample_type is SampleType.ELECTRICITY_CONSUMPTION
    assert import_counter.metric_type is MetricType.COUNTER
    assert import_counter.value == 30.511 * 1000 * 3600
    assert export_counter.sample_type is SampleType.ELECTRICITY_PRODUCTION
    assert export_counter.metric_type is MetricType.COUNTER
    assert export_counter.value == 0
    assert power.sample_type is SampleType.ELECTRICITY_CONSUMPTION
    assert power.metric_type is MetricType.GAUGE
    assert power.value == 12.3
    for sample in samples:
        assert sample.entity_type is EntityType.DEVICE
        assert sample.entity_name == product_type
        assert sample.sample_name == "Dishwasher"


def test_water_meter_samples():
    samples = build_samples(DeviceInfo.from_dict(WATER_INFO), WATER_DATA, "Watermeter")

    assert len(samples) == 2
    total, flow = samples
    assert total.sample_type is SampleType.WATER_CONSUMPTION
    assert total.metric_type is MetricType.COUNTER
    assert total.value == 123.456
    assert flow.sample_type is SampleType.WATER_CONSUMPTION
    assert flow.metric_type is MetricType.GAUGE
    assert flow.value == 0.06
    assert total.entity_name == flow.entity_name == "HWE-WTR"


def test_unmapped_telemetry_is_optional():
    data = {
        "total_power_import_t1_kwh": 1.0,
        "total_power_export_t1_kwh": 2.0,
        "active_power_w": 3,
    }

    samples = build_samples(DeviceInfo.from_dict(SOCKET_INFO), data, "Socket")

    assert [sample.value for sample in samples] == [3_600_000, 7_200_000, 3.0]


def test_missing_mapped_field_produces_no_samples():
    data = dict(P1_DATA)
    del data["total_power_export_t2_kwh"]

    with pytest.raises(HomewizardDataError):
        build_samples(DeviceInfo.from_dict(P1_INFO), data, "Meter")


def test_non_numeric_field_is_rejected():
    with pytest.raises(HomewizardDataError):
        build_samples(
            DeviceInfo.from_dict(WATER_INFO), {**WATER_DATA, "active_liter_lpm": "1.0"}, "Water"
        )


def test_kwh_to_joule_is_exact():
    assert kwh_to_joule(30.511) == 30.511 * 1000 * 3600
