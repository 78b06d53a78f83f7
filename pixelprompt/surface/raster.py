"""RasterBackend — CPU surface backend on Pillow.

Sources are PIL images in any mode (palette, greyscale, CMYK, decoded JPEG…);
they are rasterized into pooled RGBA32 surfaces and read back from there.
"""
import logging
from typing import Optional

from PIL import Image

from pixelprompt.constants import MAX_POOLED_SURFACES, PIXEL_MODE
from pixelprompt.surface.backend import RenderSurface, SurfaceBackend
from pixelprompt.surface.buffer import PixelBuffer

logger = logging.getLogger(__name__)


class RasterBackend(SurfaceBackend):

    def __init__(self, max_pooled: int = MAX_POOLED_SURFACES) -> None:
        # Free surfaces, oldest first; never more than max_pooled of them.
        self._free: list[RenderSurface] = []
        self._max_pooled = max_pooled
        self._checked_out: set[int] = set()
        self._active: Optional[RenderSurface] = None

    # ── bookkeeping ───────────────────────────────────────────────────────────

    @property
    def outstanding(self) -> int:
        """Number of temporary surfaces acquired and not yet released."""
        return len(self._checked_out)

    @property
    def pooled(self) -> int:
        return len(self._free)

    # ── SurfaceBackend interface ──────────────────────────────────────────────

    def size(self, source: Image.Image) -> tuple[int, int]:
        return source.size

    def get_temporary(self, width: int, height: int) -> RenderSurface:
        match [s for s in self._free if (s.width, s.height) == (width, height)]:
            case []:
                surface = RenderSurface(
                    width, height, Image.new(PIXEL_MODE, (width, height))
                )
            case [*_, reused]:
                self._free.remove(reused)
                surface = reused
        self._checked_out.add(id(surface))
        return surface

    def release_temporary(self, surface: RenderSurface) -> None:
        if id(surface) not in self._checked_out:
            raise RuntimeError(f"Surface {surface!r} is not checked out")
        self._checked_out.discard(id(surface))
        surface.handle.paste((0, 0, 0, 0), (0, 0, surface.width, surface.height))
        self._free.append(surface)
        del self._free[: max(len(self._free) - self._max_pooled, 0)]

    def blit(self, source: Image.Image, surface: RenderSurface) -> None:
        if source.size != (surface.width, surface.height):
            raise RuntimeError(
                f"Source is {source.width}x{source.height}, "
                f"surface is {surface.width}x{surface.height}"
            )
        rgba = source if source.mode == PIXEL_MODE else source.convert(PIXEL_MODE)
        surface.handle.paste(rgba, (0, 0))

    @property
    def active_target(self) -> Optional[RenderSurface]:
        return self._active

    @active_target.setter
    def active_target(self, surface: Optional[RenderSurface]) -> None:
        self._active = surface

    def read_pixels(self, buffer: PixelBuffer) -> None:
        match self._active:
            case None:
                raise RuntimeError("No active read target")
            case surface if (surface.width, surface.height) != (buffer.width, buffer.height):
                raise RuntimeError(
                    f"Read target is {surface.width}x{surface.height}, "
                    f"buffer is {buffer.width}x{buffer.height}"
                )
            case surface:
                buffer.data[:] = surface.handle.tobytes()
