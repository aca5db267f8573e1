"""Exceptions for the HomeWizard library."""


class HomewizardError(Exception):
    """Base exception for HomeWizard errors."""


class HomewizardDiscoveryError(HomewizardError):
    """The mDNS discovery session could not be started."""


class HomewizardConnectionError(HomewizardError):
    """A device could not be reached or returned an error status."""


class HomewizardDataError(HomewizardError):
    """A device returned data that could not be decoded."""


class HomewizardUnsupportedDeviceError(HomewizardDataError):
    """A device reported a product type this library does not know."""
