"""Exception types raised by the Paw-Check pipeline."""


class PawCheckError(Exception):
    """Base class for pipeline failures that should reach the host."""


class LocationUnavailableError(PawCheckError):
    """No location provider could resolve the device coordinates."""


class ForecastDataError(PawCheckError):
    """The forecast response is missing data needed to build a snapshot."""
