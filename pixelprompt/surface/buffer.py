"""PixelBuffer — host-readable RGBA32 pixels owned by one conversion call."""
from typing import Optional

from PIL import Image

from pixelprompt.constants import BYTES_PER_PIXEL, PIXEL_MODE


class PixelBuffer:
    """A width×height grid of 8-bit RGBA pixels.

    The buffer must be released by whoever allocated it; use it as a
    context manager to tie the release to a block.
    """

    def __init__(self, width: int, height: int, data: bytearray) -> None:
        match (width, height):
            case (int() as w, int() as h) if w > 0 and h > 0:
                pass
            case _:
                raise ValueError(f"Pixel buffer dimensions must be positive, got {width}x{height}")
        expected = width * height * BYTES_PER_PIXEL
        if len(data) != expected:
            raise ValueError(f"Pixel buffer holds {len(data)} bytes, expected {expected}")
        self.width = width
        self.height = height
        self._data: Optional[bytearray] = data

    @classmethod
    def allocate(cls, width: int, height: int) -> "PixelBuffer":
        return cls(width, height, bytearray(max(width * height, 0) * BYTES_PER_PIXEL))

    @property
    def data(self) -> bytearray:
        match self._data:
            case None:
                raise ValueError("Pixel buffer has been released")
            case data:
                return data

    @property
    def released(self) -> bool:
        return self._data is None

    def release(self) -> None:
        self._data = None

    def to_image(self) -> Image.Image:
        return Image.frombytes(PIXEL_MODE, (self.width, self.height), bytes(self.data))

    def __enter__(self) -> "PixelBuffer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else f"{len(self.data)} bytes"
        return f"PixelBuffer({self.width}x{self.height}, {state})"
