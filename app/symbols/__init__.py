"""
Symbol normalization and parameterization engine.

Pure string and geometry transforms over symbol template markup. Nothing in
this package depends on Qt; rendering goes through a RenderBackend.
"""

from .constants import DEFAULT_SETTINGS, NormalizerSettings
from .geometry import is_distribution_block, normalize_symbol, select_body_rect
from .placeholders import (
    apply_cover_visibility,
    apply_parameters,
    fill_default_parameters,
    find_placeholders,
    substitute_placeholders,
)
from .rendering import NullRenderBackend, RasterImage, RenderBackend
from .templates import TemplateCache, read_template

__all__ = [
    "DEFAULT_SETTINGS",
    "NormalizerSettings",
    "normalize_symbol",
    "is_distribution_block",
    "select_body_rect",
    "apply_cover_visibility",
    "apply_parameters",
    "fill_default_parameters",
    "find_placeholders",
    "substitute_placeholders",
    "RenderBackend",
    "NullRenderBackend",
    "RasterImage",
    "TemplateCache",
    "read_template",
]
