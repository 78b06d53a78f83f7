"""SurfaceBackend — abstract base for platforms that rasterize images into readable pixels."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from pixelprompt.surface.buffer import PixelBuffer


@dataclass(eq=False)
class RenderSurface:
    """An intermediate renderable surface handed out by a backend."""

    width: int
    height: int
    handle: Any = field(default=None, repr=False)


class SurfaceBackend(ABC):
    @abstractmethod
    def size(self, source: Any) -> tuple[int, int]:
        """Return (width, height) of a source image."""
        ...

    @abstractmethod
    def get_temporary(self, width: int, height: int) -> RenderSurface:
        """Acquire a temporary RGBA32 surface with no depth buffer."""
        ...

    @abstractmethod
    def release_temporary(self, surface: RenderSurface) -> None:
        """Give back a surface from get_temporary. Raises if it is not checked out."""
        ...

    @abstractmethod
    def blit(self, source: Any, surface: RenderSurface) -> None:
        """Rasterize source onto surface."""
        ...

    @property
    @abstractmethod
    def active_target(self) -> Optional[RenderSurface]: ...

    @active_target.setter
    @abstractmethod
    def active_target(self, surface: Optional[RenderSurface]) -> None: ...

    @abstractmethod
    def read_pixels(self, buffer: PixelBuffer) -> None:
        """Copy the active target's pixels into buffer. Raises on failure."""
        ...
