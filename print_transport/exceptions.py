"""
Print Transport Exceptions
==========================

Configuration and capability errors are raised immediately. Transport
errors happen during a print attempt and are captured into the
returned PrintingResult instead of propagating.
"""


class PrintTransportError(Exception):
    """Base class for all print transport errors."""


class ConfigurationError(PrintTransportError):
    """Missing or invalid printer configuration (host, port, credentials, device id...)."""


class InvalidTransportError(ConfigurationError):
    """A printer configuration produced a transport of the wrong protocol family."""


class UnsupportedMediaError(PrintTransportError):
    """The media does not expose the capability a transport or printer requires."""


class MediaNotConfiguredError(PrintTransportError):
    """A label was rendered before the device geometry was injected."""


class TransportError(PrintTransportError):
    """Network, authentication or protocol failure during a print attempt."""


class UnexpectedDeviceResponseError(TransportError):
    """The device answered, but not in the expected format."""
