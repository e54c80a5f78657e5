"""
symbols/placeholders.py

Placeholder substitution and feature toggles for symbol templates.
Pure string transforms, no Qt dependencies.
"""

import re
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    COVER_CAPTION_TEXT,
    COVER_ELEMENT_IDS,
    COVER_VISIBLE_KEY,
    DEFAULT_PARAMETER_VALUES,
    HIDDEN_MARKER,
    UNKNOWN_PARAMETER_VALUE,
)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Z0-9_]+)\}\}")

_HIDDEN_PATTERN = re.compile(r"\s+" + re.escape(HIDDEN_MARKER))

# Opening tag of any element carrying one of the cover ids
_COVER_TAG_PATTERN = re.compile(
    r"<[^>]*(?<![\w-])id=\"(?:" + "|".join(re.escape(i) for i in COVER_ELEMENT_IDS) + r")\"[^>]*>"
)

# A <text> element up to its first closing tag; nested <tspan>s are allowed
_TEXT_ELEMENT_PATTERN = re.compile(r"(<text\b[^>]*(?<!/)>)([\s\S]*?</text>)")


def find_placeholders(markup: str) -> list[str]:
    """Return the distinct placeholder keys in order of first appearance."""
    keys = []
    for match in PLACEHOLDER_PATTERN.finditer(markup):
        key = match.group(1)
        if key not in keys:
            keys.append(key)
    return keys


def substitute_placeholders(markup: str, parameters: Mapping[str, str]) -> str:
    """Replace every {{KEY}} that has an entry in *parameters*.

    All keys are resolved in one left-to-right pass, so inserted values are
    never scanned again. Unknown tokens are left as they are.
    """
    if not parameters:
        return markup

    tokens = {"{{" + key + "}}": str(value) for key, value in parameters.items()}
    # Longest first so a token is never shadowed by a prefix of itself
    pattern = re.compile("|".join(re.escape(t) for t in sorted(tokens, key=len, reverse=True)))
    return pattern.sub(lambda m: tokens[m.group(0)], markup)


def _strip_hidden(tag: str) -> str:
    return _HIDDEN_PATTERN.sub("", tag)


def _mark_hidden(tag: str) -> str:
    """Add the hidden marker to an opening tag, keeping self-closing form."""
    tag = _strip_hidden(tag)
    if tag.endswith("/>"):
        return tag[:-2].rstrip() + " " + HIDDEN_MARKER + "/>"
    return tag[:-1].rstrip() + " " + HIDDEN_MARKER + ">"


def _rewrite_caption(markup: str, rewrite) -> str:
    def _replace(match):
        open_tag, rest = match.group(1), match.group(2)
        if COVER_CAPTION_TEXT not in rest:
            return match.group(0)
        return rewrite(open_tag) + rest

    return _TEXT_ELEMENT_PATTERN.sub(_replace, markup)


def apply_cover_visibility(markup: str, visible: str) -> str:
    """Show or hide the protective cover, its warning glyph and its caption.

    Existing hidden markers are always stripped first, then re-applied when
    *visible* is "False". Applying the same value twice is a no-op.
    """
    result = _COVER_TAG_PATTERN.sub(lambda m: _strip_hidden(m.group(0)), markup)
    result = _rewrite_caption(result, _strip_hidden)

    if visible == "False":
        result = _COVER_TAG_PATTERN.sub(lambda m: _mark_hidden(m.group(0)), result)
        result = _rewrite_caption(result, _mark_hidden)

    return result


def apply_parameters(markup: str, parameters: Mapping[str, str]) -> str:
    """Substitute placeholders, then apply the cover toggle if it is set."""
    result = substitute_placeholders(markup, parameters)
    visible = parameters.get(COVER_VISIBLE_KEY)
    if visible is not None:
        result = apply_cover_visibility(result, visible)
    return result


def label_from_path(template_path) -> str:
    """Derive a display label from the first word of the template's file name."""
    parts = Path(template_path).stem.split()
    return parts[0] if parts else ""


def default_parameter_value(key: str, template_path: Optional[str] = None) -> str:
    """Return the value a freshly placed symbol gets for placeholder *key*."""
    if key == "LABEL":
        return label_from_path(template_path) if template_path else UNKNOWN_PARAMETER_VALUE
    return DEFAULT_PARAMETER_VALUES.get(key, UNKNOWN_PARAMETER_VALUE)


def fill_default_parameters(markup: str, parameters: Mapping[str, str],
                            template_path: Optional[str] = None) -> dict[str, str]:
    """Return a copy of *parameters* with a default for every missing placeholder."""
    filled = dict(parameters)
    for key in find_placeholders(markup):
        if key not in filled:
            filled[key] = default_parameter_value(key, template_path)
    return filled
