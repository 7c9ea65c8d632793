"""Exceptions raised by the qrstyle rendering pipeline."""


class QRStyleError(Exception):
    """Base class for all qrstyle failures."""


class EncodingError(QRStyleError):
    """The payload does not fit any QR version at error-correction level H."""


class ConfigurationError(QRStyleError, ValueError):
    """A style configuration value is malformed."""
