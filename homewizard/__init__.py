"""Python library for HomeWizard Energy devices."""

from .collector import HomewizardCollector
from .discovery import DiscoveryEvent, DiscoveryEventType, HomewizardDiscovery
from .exceptions import (
    HomewizardConnectionError,
    HomewizardDataError,
    HomewizardDiscoveryError,
    HomewizardError,
    HomewizardUnsupportedDeviceError,
)
from .homewizard import HomeWizard
from .models import (
    CollectionResult,
    Config,
    DeviceFailure,
    DeviceInfo,
    DeviceType,
    DiscoveredDevice,
    EntityType,
    Measurement,
    MetricType,
    Sample,
    SampleType,
)

__all__ = [
    "CollectionResult",
    "Config",
    "DeviceFailure",
    "DeviceInfo",
    "DeviceType",
    "DiscoveredDevice",
    "DiscoveryEvent",
    "DiscoveryEventType",
    "EntityType",
    "HomeWizard",
    "HomewizardCollector",
    "HomewizardConnectionError",
    "HomewizardDataError",
    "HomewizardDiscovery",
    "HomewizardDiscoveryError",
    "HomewizardError",
    "HomewizardUnsupportedDeviceError",
    "Measurement",
    "MetricType",
    "Sample",
    "SampleType",
]
