"""
symbols/geometry.py

Geometry normalization for symbol templates.

Templates are authored at arbitrary internal scales. The normalizer finds the
symbol's body rectangle, crops the root viewBox to it and derives a physical
size, so every symbol lands on the canvas at a consistent scale. Markup is
edited as text: only the root <svg> open tag is ever rewritten.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

from models.symbol import NormalizationResult

from .constants import (
    DEFAULT_SETTINGS,
    DISTRIBUTION_BLOCK_HEIGHT,
    DISTRIBUTION_BLOCK_MARKER,
    DISTRIBUTION_BLOCK_WIDTH,
    NormalizerSettings,
)

logger = logging.getLogger(__name__)

_NUMBER = r"([\d.\-]+)"

_OUTER_TRANSLATE_PATTERN = re.compile(
    r"<svg[^>]*>\s*<g[^>]*?\btransform\s*=\s*([\"'])\s*translate\(\s*"
    + _NUMBER
    + r"\s*(?:,|\s)\s*"
    + _NUMBER
    + r"\s*\)\s*\1",
    re.IGNORECASE | re.DOTALL,
)
_RECT_PATTERN = re.compile(r"<rect\s+[^>]*>", re.IGNORECASE)
_NO_FILL_PATTERN = re.compile(r"fill\s*:\s*none", re.IGNORECASE)
_PAGE_ID_PATTERN = re.compile(r"(?<![\w-])id\s*=\s*[\"']Page", re.IGNORECASE)
_ROOT_TAG_PATTERN = re.compile(r"<svg\b[^>]*?>", re.IGNORECASE)
_VIEW_BOX_ATTR_PATTERN = re.compile(r"\bviewBox\s*=\s*(\"[^\"]*\"|'[^']*')", re.IGNORECASE)
_VIEW_BOX_VALUE_PATTERN = re.compile(
    r"\bviewBox\s*=\s*([\"'])\s*"
    + r"[\s,]+".join([_NUMBER] * 4)
    + r"\s*\1",
    re.IGNORECASE,
)


def _attr_pattern(name: str) -> re.Pattern:
    # Lookbehind keeps 'width' from matching inside 'stroke-width'
    return re.compile(
        r"(?<![\w:-])" + name + r"\s*=\s*([\"'])" + _NUMBER + r"\1",
        re.IGNORECASE,
    )


_X_ATTR = _attr_pattern("x")
_Y_ATTR = _attr_pattern("y")
_WIDTH_ATTR = _attr_pattern("width")
_HEIGHT_ATTR = _attr_pattern("height")


def parse_number(text) -> float:
    """Parse a coordinate literal, rejecting values that overflow to inf or nan.

    Raises:
        ValueError: If *text* is not a finite number.
    """
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number: {text!r}")
    return value


@dataclass(frozen=True)
class RectCandidate:
    """A visible rectangle that may be the symbol body.

    x and y keep their raw attribute text and are parsed only for the rect
    chosen as the body, so a malformed decoration never blocks the crop.
    """

    x: Optional[str]
    y: Optional[str]
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


def is_distribution_block(template_id: Optional[str]) -> bool:
    """Check whether a template id names a fixed-size distribution block."""
    return template_id is not None and DISTRIBUTION_BLOCK_MARKER in template_id.lower()


def find_outer_translate(markup: str) -> Optional[tuple[float, float]]:
    """Return (dx, dy) of a translate() on the group directly inside the root."""
    match = _OUTER_TRANSLATE_PATTERN.search(markup)
    if match is None:
        return None
    return parse_number(match.group(2)), parse_number(match.group(3))


def _attr_text(pattern: re.Pattern, tag: str) -> Optional[str]:
    match = pattern.search(tag)
    return match.group(2) if match is not None else None


def _read_attr(pattern: re.Pattern, tag: str) -> Optional[float]:
    text = _attr_text(pattern, tag)
    return parse_number(text) if text is not None else None


def parse_rect_candidates(markup: str) -> list[RectCandidate]:
    """Collect every visible <rect> with numeric width and height.

    Rects styled with fill:none and Page frames are skipped. Raises
    ValueError if a detected width or height is not a finite number.
    """
    candidates = []
    for match in _RECT_PATTERN.finditer(markup):
        tag = match.group(0)
        if _NO_FILL_PATTERN.search(tag) or _PAGE_ID_PATTERN.search(tag):
            continue

        width = _read_attr(_WIDTH_ATTR, tag)
        height = _read_attr(_HEIGHT_ATTR, tag)
        if width is None or height is None:
            continue

        x = _attr_text(_X_ATTR, tag)
        y = _attr_text(_Y_ATTR, tag)
        candidates.append(RectCandidate(x, y, width, height))
    return candidates


def select_body_rect(candidates: list[RectCandidate],
                     min_size: float = DEFAULT_SETTINGS.min_body_size) -> Optional[RectCandidate]:
    """Pick the largest candidate larger than *min_size* on both axes.

    The first candidate wins when several share the largest area.
    """
    eligible = [c for c in candidates if c.width > min_size and c.height > min_size]
    if not eligible:
        return None
    return max(eligible, key=lambda c: c.area)


def crop_origin(body: RectCandidate,
                translate: Optional[tuple[float, float]]) -> tuple[float, float]:
    """Return the body origin shifted by the outer translate.

    A missing x or y reads as 0. Raises ValueError if either is malformed.
    """
    x = parse_number(body.x) if body.x is not None else 0.0
    y = parse_number(body.y) if body.y is not None else 0.0
    if translate is None:
        return x, y
    return x + translate[0], y + translate[1]


def crop_is_safe(crop_x: float, crop_y: float,
                 threshold: float = DEFAULT_SETTINGS.crop_threshold) -> bool:
    """Reject crop origins that point into an unresolved nested transform."""
    return math.isfinite(crop_x) and math.isfinite(crop_y) and crop_x < threshold and crop_y < threshold


def format_number(value: float) -> str:
    """Format a coordinate locale-invariantly: 10.0 -> '10', 2.5 -> '2.5'."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def rewrite_view_box(markup: str, view_box: tuple[float, float, float, float]) -> str:
    """Set the viewBox on the root <svg> open tag, leaving the rest untouched.

    An existing viewBox is replaced, otherwise one is inserted before the
    tag's closing bracket. Markup without an <svg> tag is returned as is.
    """
    match = _ROOT_TAG_PATTERN.search(markup)
    if match is None:
        return markup

    value = " ".join(format_number(v) for v in view_box)
    attr = f'viewBox="{value}"'
    old_tag = match.group(0)

    if _VIEW_BOX_ATTR_PATTERN.search(old_tag):
        new_tag = _VIEW_BOX_ATTR_PATTERN.sub(lambda m: attr, old_tag, count=1)
    elif old_tag.endswith("/>"):
        new_tag = old_tag[:-2].rstrip() + " " + attr + "/>"
    else:
        new_tag = old_tag[:-1].rstrip() + " " + attr + ">"

    return markup[:match.start()] + new_tag + markup[match.end():]


def read_view_box(markup: str) -> Optional[tuple[float, float, float, float]]:
    """Return the first declared viewBox as four floats, if any."""
    match = _VIEW_BOX_VALUE_PATTERN.search(markup)
    if match is None:
        return None
    return tuple(parse_number(match.group(i)) for i in range(2, 6))


def _derive_geometry(markup: str, template_id: Optional[str],
                     settings: NormalizerSettings) -> NormalizationResult:
    translate = find_outer_translate(markup)
    body = select_body_rect(parse_rect_candidates(markup), settings.min_body_size)

    result = None
    if body is not None:
        crop_x, crop_y = crop_origin(body, translate)
        if crop_is_safe(crop_x, crop_y, settings.crop_threshold):
            view_box = (crop_x, crop_y, body.width, body.height)
            logger.debug("Cropping %s to body viewBox %s", template_id, view_box)
            result = NormalizationResult(
                markup=rewrite_view_box(markup, view_box),
                width=body.width * settings.scale_factor,
                height=body.height * settings.scale_factor,
                view_box=view_box,
            )
        else:
            logger.debug("Rejected crop origin (%s, %s) for %s", crop_x, crop_y, template_id)

    if result is None:
        declared = read_view_box(markup)
        if declared is not None:
            width = declared[2] * settings.scale_factor
            height = declared[3] * settings.scale_factor
        else:
            width, height = settings.default_width, settings.default_height
        result = NormalizationResult(markup=markup, width=width, height=height)

    if is_distribution_block(template_id):
        result = NormalizationResult(
            markup=result.markup,
            width=DISTRIBUTION_BLOCK_WIDTH,
            height=DISTRIBUTION_BLOCK_HEIGHT,
            view_box=result.view_box,
        )
    elif not (math.isfinite(result.width) and math.isfinite(result.height)):
        raise ValueError(f"physical size overflows: {result.width} x {result.height}")
    return result


def normalize_symbol(markup: str, template_id: Optional[str] = None,
                     settings: Optional[NormalizerSettings] = None) -> NormalizationResult:
    """Crop a resolved template to its body and compute its physical size.

    Never raises for malformed markup. A ValueError from a malformed or
    non-finite number, or a TypeError or OverflowError from arithmetic on
    the parsed values, is logged and the original markup is returned with
    the default size.

    Args:
        markup: template markup with placeholders already substituted
        template_id: template path or id, used to detect distribution blocks
        settings: normalizer tuning, defaults to DEFAULT_SETTINGS

    Returns:
        NormalizationResult with the rewritten markup and physical size
    """
    settings = settings or DEFAULT_SETTINGS
    try:
        return _derive_geometry(markup, template_id, settings)
    except (ValueError, TypeError, OverflowError) as e:
        logger.warning("Failed to normalize symbol %s: %s", template_id, e)
        return NormalizationResult(
            markup=markup,
            width=settings.default_width,
            height=settings.default_height,
        )
