"""
Controllers for Elektryk Pomocnik.

This package contains Qt-free controller classes that orchestrate
operations between models and views using an observer pattern.
Persisted settings live in controllers.settings, which needs PyQt6.
"""

from .schematic_controller import SchematicController
from .symbol_builder import SymbolBuilder

__all__ = [
    "SchematicController",
    "SymbolBuilder",
]
