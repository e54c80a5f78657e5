"""
constants.py - Named configuration values for the symbol engine.

Physical sizes are expressed in canvas units. Templates are authored in an
arbitrary internal unit; SCALE_FACTOR converts a 212-unit wide module body
into the 232.58 canvas units of one 17.5 mm DIN module.
"""

from dataclasses import dataclass

# Unit conversion
SCALE_FACTOR = 232.58 / 212.0

# Size used when no geometry can be derived at all (one 1P module)
DEFAULT_SYMBOL_WIDTH = 232.58
DEFAULT_SYMBOL_HEIGHT = 1103.0

# Body detection heuristics
CROP_SAFETY_THRESHOLD = 500.0  # Crop origins at or beyond this are rejected
MIN_BODY_SIZE = 10.0  # Body rect must exceed this on both axes

# Distribution-block class (fixed physical footprint)
DISTRIBUTION_BLOCK_MARKER = "blok rozdzielczy"
DISTRIBUTION_BLOCK_WIDTH = 101.0 * 13.29
DISTRIBUTION_BLOCK_HEIGHT = 88.0 * 13.29

# Protective cover toggle
COVER_VISIBLE_KEY = "BLUE_COVER_VISIBLE"
COVER_ELEMENT_IDS = ("osłona-niebieska", "danger")
COVER_CAPTION_TEXT = "lok rozdzielczy"
HIDDEN_MARKER = 'display="none"'

# Template formats
VECTOR_EXTENSIONS = (".svg",)
RASTER_EXTENSIONS = (".png", ".jpg", ".jpeg")

# Placeholder defaults, keyed by token name. LABEL is derived from the
# template file name and handled separately.
DEFAULT_PARAMETER_VALUES = {
    "CURRENT": "40A",
    "SENSITIVITY": "30mA",
    "TYPE": "Typ A",
    "SUBTEXT": "",
}
UNKNOWN_PARAMETER_VALUE = "?"


@dataclass(frozen=True)
class NormalizerSettings:
    """Tunable knobs for the geometry normalizer.

    The crop threshold and minimum body size were tuned against the current
    template library and may need recalibrating for new templates.
    """

    scale_factor: float = SCALE_FACTOR
    crop_threshold: float = CROP_SAFETY_THRESHOLD
    min_body_size: float = MIN_BODY_SIZE
    default_width: float = DEFAULT_SYMBOL_WIDTH
    default_height: float = DEFAULT_SYMBOL_HEIGHT

    def to_dict(self) -> dict:
        return {
            "scale_factor": self.scale_factor,
            "crop_threshold": self.crop_threshold,
            "min_body_size": self.min_body_size,
            "default_width": self.default_width,
            "default_height": self.default_height,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NormalizerSettings":
        defaults = cls()
        return cls(
            scale_factor=float(data.get("scale_factor", defaults.scale_factor)),
            crop_threshold=float(data.get("crop_threshold", defaults.crop_threshold)),
            min_body_size=float(data.get("min_body_size", defaults.min_body_size)),
            default_width=float(data.get("default_width", defaults.default_width)),
            default_height=float(data.get("default_height", defaults.default_height)),
        )


DEFAULT_SETTINGS = NormalizerSettings()
