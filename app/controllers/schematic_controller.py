"""
SchematicController - Orchestrates placing, editing and removing symbols.

This module contains no Qt dependencies. It manages the SchematicModel
and notifies views of changes through an observer pattern.
"""

import logging
from typing import Any, Callable, Optional

from models.schematic import SchematicModel
from models.symbol import ParameterMap, SymbolInstance

from .symbol_builder import SymbolBuilder

logger = logging.getLogger(__name__)


class SchematicController:
    """
    Controller for symbol operations on the schematic.

    Observer events:
        symbol_added (SymbolInstance) - A symbol was placed
        symbol_removed (SymbolInstance) - A symbol was deleted
        symbol_moved (SymbolInstance) - A symbol's center changed
        symbol_parameters_changed (SymbolInstance) - Parameters replaced, visual rebuilt
        selection_changed (list[SymbolInstance]) - The set of selected symbols changed
        symbols_reloaded (None) - Every symbol's visual was rebuilt
        schematic_cleared (None) - All symbols were removed
    """

    def __init__(self, model: Optional[SchematicModel] = None,
                 builder: Optional[SymbolBuilder] = None):
        self.model = model or SchematicModel()
        self.builder = builder or SymbolBuilder()
        self._observers: list[Callable[[str, Any], None]] = []

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Symbol operations ---

    def place_symbol(self, template_path, symbol_type: str = "Unknown",
                     label: str = "Module",
                     drop_point: tuple[float, float] = (0.0, 0.0)) -> SymbolInstance:
        """
        Build a symbol from a template and add it centered on *drop_point*.

        Always adds a symbol; one whose template failed to load has zero
        size and no visual.
        """
        symbol = self.builder.build(
            template_path,
            symbol_type=symbol_type,
            label=label,
            drop_point=drop_point,
            symbol_id=self.model.next_symbol_id(),
        )
        self.model.add_symbol(symbol)
        left, top = symbol.top_left
        logger.info("Added %s @ (%.0f, %.0f)", label, left, top)
        self._notify('symbol_added', symbol)
        return symbol

    def update_symbol_parameters(self, symbol_id: str, parameters: ParameterMap) -> None:
        """Replace a symbol's parameters and rebuild its visual."""
        symbol = self.model.get_symbol(symbol_id)
        if symbol is None:
            return
        self.builder.update_parameters(symbol, parameters)
        self._notify('symbol_parameters_changed', symbol)

    def move_symbol(self, symbol_id: str, center: tuple[float, float]) -> None:
        symbol = self.model.get_symbol(symbol_id)
        if symbol is None:
            return
        symbol.position = (float(center[0]), float(center[1]))
        self._notify('symbol_moved', symbol)

    def remove_symbol(self, symbol_id: str) -> None:
        symbol = self.model.remove_symbol(symbol_id)
        if symbol is None:
            return
        logger.info("Removed %s (%s)", symbol.symbol_id, symbol.label)
        self._notify('symbol_removed', symbol)

    def delete_selected(self) -> list[SymbolInstance]:
        """Remove every selected symbol and return them."""
        removed = self.model.selected_symbols()
        for symbol in removed:
            self.remove_symbol(symbol.symbol_id)
        return removed

    def clear(self) -> None:
        self.model.clear()
        self._notify('schematic_cleared', None)

    # --- Selection ---

    def select_symbol(self, symbol_id: str, additive: bool = False) -> None:
        """Select a symbol, keeping the existing selection only if *additive*."""
        symbol = self.model.get_symbol(symbol_id)
        if symbol is None:
            return
        if not additive:
            for other in self.model.symbols:
                other.is_selected = False
        symbol.is_selected = True
        self._notify('selection_changed', self.model.selected_symbols())

    def clear_selection(self) -> None:
        if not self.model.selected_symbols():
            return
        for symbol in self.model.symbols:
            symbol.is_selected = False
        self._notify('selection_changed', [])

    # --- Loading ---

    def load_model(self, model: SchematicModel) -> None:
        """Swap in a deserialized model and rebuild its visuals."""
        self.model = model
        self.reload_visuals()

    def reload_visuals(self) -> None:
        """Rebuild every symbol's visual from its template."""
        for symbol in self.model.symbols:
            if not self.builder.refresh(symbol):
                logger.warning("Could not reload visual for %s from %s",
                               symbol.symbol_id, symbol.template_path)
        self._notify('symbols_reloaded', None)
