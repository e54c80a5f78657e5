"""
SymbolBuilder - Turns a template file into a placed SymbolInstance.

This module contains no Qt dependencies. It runs the placeholder
substitutor and the geometry normalizer, then asks a RenderBackend for the
visual. Load and render failures never propagate: the symbol is still
created, just without a visual.
"""

import logging
from typing import Any, Optional

from models.symbol import NormalizationResult, ParameterMap, SymbolInstance, SymbolTemplate
from symbols.constants import COVER_VISIBLE_KEY, NormalizerSettings
from symbols.geometry import is_distribution_block, normalize_symbol
from symbols.placeholders import apply_parameters, fill_default_parameters
from symbols.rendering import NullRenderBackend, RenderBackend
from symbols.templates import TemplateCache, read_template

logger = logging.getLogger(__name__)


class SymbolBuilder:
    """
    Builds and refreshes symbol instances.

    Args:
        render_backend: backend producing visual handles (default: none drawn)
        template_cache: optional shared cache, templates are re-read otherwise
        settings: normalizer tuning passed through to normalize_symbol
    """

    def __init__(self, render_backend: Optional[RenderBackend] = None,
                 template_cache: Optional[TemplateCache] = None,
                 settings: Optional[NormalizerSettings] = None):
        self.render_backend = render_backend or NullRenderBackend()
        self.template_cache = template_cache
        self.settings = settings

    # --- Template loading ---

    def load_template(self, template_path) -> Optional[SymbolTemplate]:
        """Load a template, returning None (and logging) on failure."""
        try:
            if self.template_cache is not None:
                return self.template_cache.get(template_path)
            return read_template(template_path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Failed to load symbol template %s: %s", template_path, e)
            return None

    @staticmethod
    def initial_parameters(template: SymbolTemplate,
                           parameters: Optional[ParameterMap] = None) -> ParameterMap:
        """Return the parameters a newly placed symbol starts with."""
        result = dict(parameters or {})
        if not template.is_vector:
            return result
        if is_distribution_block(template.template_id):
            result.setdefault(COVER_VISIBLE_KEY, "True")
        return fill_default_parameters(template.markup, result, template.template_id)

    # --- Pipeline ---

    def resolve(self, template: SymbolTemplate, parameters: ParameterMap) -> NormalizationResult:
        """Substitute parameters into a vector template and normalize it."""
        markup = apply_parameters(template.markup, parameters)
        return normalize_symbol(markup, template.template_id, self.settings)

    def _render(self, template: SymbolTemplate,
                parameters: ParameterMap) -> tuple[Any, float, float]:
        """Return (visual, width, height) for a loaded template."""
        if template.is_raster:
            raster = self.render_backend.render_raster(template.data)
            if raster is None:
                logger.warning("Could not decode raster template %s", template.template_id)
                return None, 0.0, 0.0
            return raster.handle, raster.width, raster.height

        result = self.resolve(template, parameters)
        visual = self.render_backend.render_markup(result.markup, result.width, result.height)
        if visual is None:
            logger.debug("Render backend produced no visual for %s", template.template_id)
        return visual, result.width, result.height

    # --- Public API ---

    def build(self, template_path, symbol_type: str = "Unknown", label: str = "Module",
              drop_point: tuple[float, float] = (0.0, 0.0),
              symbol_id: str = "", parameters: Optional[ParameterMap] = None) -> SymbolInstance:
        """
        Create a symbol from a template, centered on *drop_point*.

        A template that cannot be loaded yields a symbol with zero size and
        no visual instead of an error.
        """
        symbol = SymbolInstance(
            symbol_id=symbol_id,
            template_path=str(template_path) if template_path else None,
            symbol_type=symbol_type,
            label=label,
            parameters=dict(parameters or {}),
            position=(float(drop_point[0]), float(drop_point[1])),
        )
        if not template_path:
            return symbol

        template = self.load_template(template_path)
        if template is None:
            return symbol

        symbol.parameters = self.initial_parameters(template, symbol.parameters)
        symbol.visual, symbol.width, symbol.height = self._render(template, symbol.parameters)
        return symbol

    def refresh(self, symbol: SymbolInstance) -> bool:
        """Re-run substitution, normalization and rendering for *symbol*.

        The symbol keeps its center. Returns False (leaving the symbol as it
        was) if the template can no longer be loaded.
        """
        if not symbol.template_path:
            return False
        template = self.load_template(symbol.template_path)
        if template is None:
            return False

        symbol.visual, symbol.width, symbol.height = self._render(template, symbol.parameters)
        return True

    def update_parameters(self, symbol: SymbolInstance, parameters: ParameterMap) -> bool:
        """Replace the symbol's parameters wholesale and rebuild its visual."""
        symbol.parameters = dict(parameters)
        symbol.visual = None
        return self.refresh(symbol)

    def preview(self, template_path,
                parameters: Optional[ParameterMap] = None) -> tuple[Optional[NormalizationResult], Any]:
        """Resolve a template for a drag preview without creating a symbol.

        Returns (result, visual). result is None for raster templates and for
        templates that cannot be loaded.
        """
        template = self.load_template(template_path)
        if template is None:
            return None, None
        if template.is_raster:
            raster = self.render_backend.render_raster(template.data)
            return None, raster.handle if raster is not None else None

        result = self.resolve(template, self.initial_parameters(template, parameters))
        return result, self.render_backend.render_markup(result.markup, result.width, result.height)

