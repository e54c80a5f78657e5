"""
SymbolInstance - Pure Python data model for placed schematic symbols.

This module contains no Qt dependencies. Positions are (x, y) tuples and the
render handle is an opaque object supplied by the rendering backend.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

# Token name -> string value. Replaced wholesale on edit.
ParameterMap = dict[str, str]


@dataclass(frozen=True)
class SymbolTemplate:
    """A symbol template loaded from the library.

    Vector templates carry their markup as text, raster templates carry the
    raw file bytes.
    """

    path: Path
    markup: Optional[str] = None
    data: Optional[bytes] = None

    @property
    def template_id(self) -> str:
        return str(self.path)

    @property
    def is_vector(self) -> bool:
        return self.markup is not None

    @property
    def is_raster(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class NormalizationResult:
    """Output of the geometry normalizer.

    view_box is the (x, y, width, height) window written into the root tag,
    or None when the markup was left untouched.
    """

    markup: str
    width: float
    height: float
    view_box: Optional[tuple[float, float, float, float]] = None

    @property
    def cropped(self) -> bool:
        return self.view_box is not None

    def as_tuple(self) -> tuple[str, float, float]:
        return (self.markup, self.width, self.height)


@dataclass
class SymbolInstance:
    """
    A symbol placed on the schematic.

    position is the CENTER of the symbol in canvas coordinates; width and
    height are always the normalized physical size, never the size declared
    by the template.
    """

    symbol_id: str
    template_path: Optional[str]
    symbol_type: str = "Unknown"
    label: str = "Module"
    parameters: ParameterMap = field(default_factory=dict)
    position: tuple[float, float] = (0.0, 0.0)
    width: float = 0.0
    height: float = 0.0
    visual: Any = None
    is_selected: bool = False

    @property
    def has_visual(self) -> bool:
        return self.visual is not None

    @property
    def top_left(self) -> tuple[float, float]:
        cx, cy = self.position
        return (cx - self.width / 2, cy - self.height / 2)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Return (left, top, width, height) in canvas coordinates."""
        left, top = self.top_left
        return (left, top, self.width, self.height)

    def to_dict(self) -> dict:
        """Serialize to dictionary. The render handle is never persisted."""
        return {
            "id": self.symbol_id,
            "template": self.template_path,
            "type": self.symbol_type,
            "label": self.label,
            "parameters": dict(self.parameters),
            "pos": {"x": self.position[0], "y": self.position[1]},
            "size": {"width": self.width, "height": self.height},
            "selected": self.is_selected,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SymbolInstance":
        pos = data.get("pos", {})
        size = data.get("size", {})
        return cls(
            symbol_id=data["id"],
            template_path=data.get("template"),
            symbol_type=data.get("type", "Unknown"),
            label=data.get("label", "Module"),
            parameters={str(k): str(v) for k, v in data.get("parameters", {}).items()},
            position=(float(pos.get("x", 0.0)), float(pos.get("y", 0.0))),
            width=float(size.get("width", 0.0)),
            height=float(size.get("height", 0.0)),
            is_selected=bool(data.get("selected", False)),
        )
