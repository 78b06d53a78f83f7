"""Errors raised by the conversion stages (readback, encoding).

The network stage never raises these; it returns a classified result instead.
"""


class ConversionError(Exception):
    """Base for every failure before the request leaves the process."""


class SurfaceUnavailable(ConversionError):
    """The source image is missing or has no pixels."""


class ReadbackFailure(ConversionError):
    """Rasterizing the source or copying its pixels failed."""


class EncodingFailure(ConversionError):
    """The codec produced no output for a pixel buffer."""
