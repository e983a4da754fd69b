"""
Exception hierarchy for the application.
"""


class GdpGlobeError(Exception):
    """Base class for all errors raised by gdpglobe."""


class RecordValidationError(GdpGlobeError, ValueError):
    """A GDP record from the data source is missing a field or has an invalid value."""


class BoundaryLoadError(GdpGlobeError):
    """The world boundary dataset could not be fetched or parsed."""


class GdpFetchError(GdpGlobeError):
    """The GDP data source returned nothing usable."""
