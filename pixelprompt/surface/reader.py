"""Surface Reader — turn any source image into a host-readable PixelBuffer.

The source is rasterized onto a temporary surface, that surface is made the
active read target, and its pixels are copied out. The temporary surface and
the previous read target are both restored on every exit path, cancellation
included.
"""
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from pixelprompt.constants import MSG_READBACK_OK
from pixelprompt.errors import ReadbackFailure, SurfaceUnavailable
from pixelprompt.surface.backend import RenderSurface, SurfaceBackend
from pixelprompt.surface.buffer import PixelBuffer

logger = logging.getLogger(__name__)

# The active read target is a single process-wide slot.
_ACTIVE_TARGET_LOCK = threading.Lock()


@contextmanager
def temporary_surface(backend: SurfaceBackend, width: int, height: int) -> Iterator[RenderSurface]:
    surface = backend.get_temporary(width, height)
    try:
        yield surface
    finally:
        backend.release_temporary(surface)


@contextmanager
def active_target(backend: SurfaceBackend, surface: RenderSurface) -> Iterator[RenderSurface]:
    previous: Optional[RenderSurface] = backend.active_target
    backend.active_target = surface
    try:
        yield surface
    finally:
        backend.active_target = previous


def read_surface(source: Any, backend: SurfaceBackend) -> PixelBuffer:
    """Return a new PixelBuffer with the source's pixels. The caller owns and releases it."""
    match source:
        case None:
            raise SurfaceUnavailable("Source image is None")
        case _:
            pass

    try:
        width, height = backend.size(source)
    except (AttributeError, TypeError, ValueError) as exc:
        raise SurfaceUnavailable(f"Source is not a readable image: {exc}") from exc
    if width <= 0 or height <= 0:
        raise SurfaceUnavailable(f"Source image has no pixels ({width}x{height})")

    buffer: Optional[PixelBuffer] = None
    with _ACTIVE_TARGET_LOCK:
        try:
            with temporary_surface(backend, width, height) as surface:
                backend.blit(source, surface)
                with active_target(backend, surface):
                    buffer = PixelBuffer.allocate(width, height)
                    backend.read_pixels(buffer)
        except Exception as exc:
            match buffer:
                case None:
                    pass
                case partial:
                    partial.release()
            raise ReadbackFailure(f"Could not read back {width}x{height} surface: {exc}") from exc

    logger.debug(MSG_READBACK_OK, width, height)
    return buffer
