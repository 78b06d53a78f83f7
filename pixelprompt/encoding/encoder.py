"""Image Encoder — compress a PixelBuffer and render it as base-64 transport text."""
import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from pixelprompt.constants import (
    DATA_URI_TEMPLATE,
    DEFAULT_JPEG_QUALITY,
    JPEG_PIXEL_MODE,
    MIME_JPEG,
    MIME_PNG,
    MSG_ENCODED,
    PIL_FORMAT_JPEG,
    PIL_FORMAT_PNG,
    QUALITY_MAX,
    QUALITY_MIN,
)
from pixelprompt.errors import EncodingFailure
from pixelprompt.surface.backend import SurfaceBackend
from pixelprompt.surface.buffer import PixelBuffer
from pixelprompt.surface.reader import read_surface

logger = logging.getLogger(__name__)


def clamp_quality(quality: int) -> int:
    return max(QUALITY_MIN, min(QUALITY_MAX, int(quality)))


@dataclass(frozen=True)
class Lossy:
    """JPEG at the given quality; out-of-range values are clamped, not rejected."""

    quality: int = DEFAULT_JPEG_QUALITY

    def __post_init__(self) -> None:
        object.__setattr__(self, "quality", clamp_quality(self.quality))


@dataclass(frozen=True)
class Lossless:
    """PNG, pixel-exact."""


ImageFormat = Union[Lossy, Lossless]


def mime_type_for(fmt: ImageFormat) -> str:
    match fmt:
        case Lossy():
            return MIME_JPEG
        case Lossless():
            return MIME_PNG
        case _:
            raise ValueError(f"Unsupported image format: {fmt!r}")


@dataclass(frozen=True)
class EncodedImage:
    data: bytes
    format: ImageFormat

    @property
    def quality(self) -> Optional[int]:
        match self.format:
            case Lossy(quality=q):
                return q
            case _:
                return None

    @property
    def mime_type(self) -> str:
        return mime_type_for(self.format)


@dataclass(frozen=True)
class TransportText:
    text: str
    mime_type: str

    @property
    def data_uri(self) -> str:
        return DATA_URI_TEMPLATE % (self.mime_type, self.text)


def encode(buffer: PixelBuffer, fmt: ImageFormat) -> EncodedImage:
    if buffer.released:
        raise EncodingFailure("Cannot encode a released pixel buffer")

    image = buffer.to_image()
    out = io.BytesIO()
    try:
        match fmt:
            case Lossy(quality=q):
                image.convert(JPEG_PIXEL_MODE).save(out, format=PIL_FORMAT_JPEG, quality=q)
            case Lossless():
                image.save(out, format=PIL_FORMAT_PNG)
            case _:
                raise ValueError(f"Unsupported image format: {fmt!r}")
    except (OSError, ValueError) as exc:
        raise EncodingFailure(f"Codec failed for {fmt!r}: {exc}") from exc

    data = out.getvalue()
    match data:
        case b"":
            raise EncodingFailure(f"Codec produced no bytes for {fmt!r}")
        case _:
            return EncodedImage(data=data, format=fmt)


def to_transport_text(image: EncodedImage) -> TransportText:
    return TransportText(
        text=base64.standard_b64encode(image.data).decode("ascii"),
        mime_type=image.mime_type,
    )


def from_transport_text(text: str) -> bytes:
    """Inverse of to_transport_text. Raises ValueError on anything that is not padded base-64."""
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Not valid base-64 transport text: {exc}") from exc


def to_base64(
    source: Any,
    backend: SurfaceBackend,
    fmt: ImageFormat = Lossy(),
) -> TransportText:
    """Read back, encode and convert source in one call.

    The intermediate PixelBuffer never outlives this call.
    """
    with read_surface(source, backend) as buffer:
        encoded = encode(buffer, fmt)
    transport = to_transport_text(encoded)
    logger.debug(MSG_ENCODED, encoded.mime_type, len(encoded.data), len(transport.text))
    return transport
