"""Rendering backend interface for symbol visuals.

The engine hands final markup (or raw raster bytes) to a backend and stores
whatever handle comes back on the SymbolInstance without looking inside it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RasterImage:
    """A decoded raster template: its handle plus pixel size."""

    handle: Any
    width: float
    height: float


class RenderBackend(ABC):
    """Turns symbol markup into a displayable image handle."""

    @abstractmethod
    def render_markup(self, markup: str, width: float, height: float) -> Optional[Any]:
        """Render vector markup at the given physical size.

        Returns None if the markup cannot be rendered.
        """

    @abstractmethod
    def render_raster(self, data: bytes) -> Optional[RasterImage]:
        """Decode a raster template. Returns None if the bytes are unreadable."""


class NullRenderBackend(RenderBackend):
    """Backend for headless use: geometry is computed, nothing is drawn."""

    def render_markup(self, markup, width, height):
        return None

    def render_raster(self, data):
        return None
